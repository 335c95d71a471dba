"""
Analyses router package.

Exports the router for analysis lifecycle endpoints.
"""

from .analyses_router import router

__all__ = ["router"]
