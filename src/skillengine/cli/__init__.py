"""Command-line interface for skillengine."""
