"""
Endpoint routers
"""

from . import assistant, movies

__all__ = ["assistant", "movies"]
