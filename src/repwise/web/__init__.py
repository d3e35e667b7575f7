"""JSON API for repwise."""

from .app import create_app

__all__ = ["create_app"]
