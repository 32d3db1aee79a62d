"""FastAPI application for the chat relay."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from streamchat.api.chat import router as chat_router
from streamchat.relay.config import DEFAULT_MODEL, GROQ_BASE_URL

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    logger.info(f"Relay ready: forwarding to {DEFAULT_MODEL} at {GROQ_BASE_URL}")
    yield
    logger.info("Relay stopped")


def create_app() -> FastAPI:
    """Build the relay app: ``POST /api/chat`` plus a health check.

    CORS is open so a chat page served from another port can call it.
    """
    application = FastAPI(title="streamchat", version="0.1.0", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "streamchat"}

    return application


app = create_app()
