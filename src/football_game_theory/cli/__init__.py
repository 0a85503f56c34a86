"""Command-line interface for football game theory."""

from .app import main

__all__ = ["main"]
