"""Command-line interface for healthz."""
