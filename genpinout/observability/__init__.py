"""Logging setup and render metrics."""
