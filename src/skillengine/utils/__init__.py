"""Utility modules for skillengine."""
