"""
Test application for HTTP integration tests.

Reuses the production application so routes, handlers and wiring match.
"""

from src.main import app

__all__ = ['app']
