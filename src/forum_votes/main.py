# src/forum_votes/main.py
"""Main entry point for the forum voting service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from forum_votes.api.v1 import posts_router, users_router, votes_router
from forum_votes.core.errors import VoteError
from forum_votes.core.logging_config import configure_logging
from forum_votes.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Voting, karma and hot ranking for a discussion forum",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routers
app.include_router(votes_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(VoteError)
async def vote_error_handler(request: Request, exc: VoteError) -> JSONResponse:
    """Render core errors with their stable message and status."""
    if exc.status_code >= 500:
        logger.error("Vote request %s failed: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("forum_votes.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
