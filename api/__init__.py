"""App-level middleware and error handlers."""
