"""
REST API for AI Blog Summary.
"""

from .router import create_api_router

__all__ = [
    'create_api_router',
]
