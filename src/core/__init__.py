"""Core: domain models, interfaces, playlist text handling and services.

The core never imports from `adapters` or `cli`.
"""
