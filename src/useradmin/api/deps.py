"""Centralized FastAPI dependency definitions for the API layer.

Routers should import dependencies from here instead of directly from
their underlying implementation modules, so tests can override them via
``app.dependency_overrides[deps.get_db]``.
"""

from useradmin.db.session import get_db

__all__ = ["get_db"]
