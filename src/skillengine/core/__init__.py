"""Core skill engine functionality."""
