"""Infrastructure adapters: HTTP probing, playlist files, report export."""
