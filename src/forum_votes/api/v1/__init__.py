"""Version 1 API endpoints."""

from .endpoints import posts_router, users_router, votes_router

__all__ = [
    "posts_router",
    "users_router",
    "votes_router",
]
