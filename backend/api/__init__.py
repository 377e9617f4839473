"""
Listkeeper API package.

Provides the FastAPI application for the mailing list subscription service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
