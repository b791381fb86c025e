"""Host server for the chat page.

NiceGUI mounts the chat interface onto this FastAPI app. Startup warms the
render pipeline so markdown and sanitization are available as early as
possible; pages served before that render escaped plain text.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from webhook_chat.config import get_client_config
from webhook_chat.rendering.pipeline import get_render_pipeline

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Resolve render capabilities, then serve until shutdown.

    A capability that fails to load is logged by the pipeline and the
    server keeps running in degraded mode.
    """
    config = get_client_config()
    logger.info(f"Chat client '{config.app_title}' posting to {config.api_url}")

    pipeline = get_render_pipeline()
    await pipeline.resolve_all()
    logger.info(
        f"Renderer ready: markdown={pipeline.formatter.ready}, sanitizer={pipeline.sanitizer.ready}"
    )
    yield
    logger.info("Chat client stopped")


def create_app() -> FastAPI:
    """Build the host app with CORS and a health route reporting renderer state."""
    application = FastAPI(
        title="Webhook Chat",
        description=(
            "Conversational web client for a single text-generation webhook. "
            "Sends each message with a per-session identifier and renders "
            "replies as sanitized markdown."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/health")
    async def health_check() -> dict[str, str | bool]:
        """Report liveness and whether replies render as formatted markdown."""
        pipeline = get_render_pipeline()
        return {
            "status": "healthy",
            "service": "webhook-chat",
            "markdown": pipeline.formatter.ready,
            "sanitizer": pipeline.sanitizer.ready,
        }

    return application


app = create_app()
