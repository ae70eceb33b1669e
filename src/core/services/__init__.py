"""Application services (orchestration without I/O details)."""
