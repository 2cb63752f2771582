"""User directory adapter."""

from .client import HttpDirectoryClient, MockDirectoryClient

__all__ = ["HttpDirectoryClient", "MockDirectoryClient"]
