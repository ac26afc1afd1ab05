"""Command-line interface for modplan."""

from .app import app

__all__ = ["app"]
