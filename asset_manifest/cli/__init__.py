"""Command-line entry points for asset-manifest."""

from .manifest import main

__all__ = ["main"]
