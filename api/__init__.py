"""
HTTP API for the syndication notifier.

This package provides a single FastAPI application that exposes:
- A hook ingress for remote syndication engines
- Inspection of notifications kept by the in-memory sink
- Read-only access to the post and site fixtures
"""

from api.main import app

__all__ = ["app"]
