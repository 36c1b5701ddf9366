"""Command line interface for contactnet."""

from .app import app

__all__ = ["app"]
