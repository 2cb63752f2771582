"""Session adapter."""

from .jwt import JWTSessionManager

__all__ = ["JWTSessionManager"]
