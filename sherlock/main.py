# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import logging
import asyncio

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.v1 import (
    identity_router,
    events_router,
    session_router,
    observation_router,
    voice_agent_router,
    media_router,
)
from .application.services.notification_debouncer import NotificationDebouncer
from .application.services.observation_pipeline import ObservationPipeline
from .application.services.visual_context_bus import VisualContextBus
from .di.container import DIContainer, get_container
from .infrastructure.db.mongo_connection import close_database, ensure_indexes
from .infrastructure.http_client_factory import close_shared_http_client
from .infrastructure.notifications.voice_agent_channel import VoiceAgentChannel

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Background sender for the voice agent channel
_voice_agent_task: Optional[asyncio.Task] = None

SHUTDOWN_DRAIN_SECONDS = 5.0


async def start_services(container: DIContainer) -> None:
    """
    Bring the recognition pipeline up:
    indexes → voice agent sender → debouncer subscription → pipeline.
    """
    global _voice_agent_task

    try:
        await ensure_indexes(container.get("database"))
    except Exception as e:
        # Don't fail app startup if MongoDB is temporarily unavailable
        logger.error(f"Failed to ensure MongoDB indexes: {e}", exc_info=True)

    channel = container.get(VoiceAgentChannel)
    _voice_agent_task = asyncio.create_task(channel.run())
    logger.info("Voice agent sender task started")

    container.get(NotificationDebouncer).attach(container.get(VisualContextBus))
    container.get(ObservationPipeline).start()


async def stop_services(container: DIContainer) -> None:
    global _voice_agent_task

    pipeline = container.get(ObservationPipeline)
    pipeline.stop()
    await pipeline.drain(timeout=SHUTDOWN_DRAIN_SECONDS)

    container.get(NotificationDebouncer).detach()
    container.get(VisualContextBus).clear()

    if _voice_agent_task:
        _voice_agent_task.cancel()
        try:
            await _voice_agent_task
        except asyncio.CancelledError:
            pass
        _voice_agent_task = None
        logger.info("Voice agent sender task stopped")

    await close_shared_http_client()
    close_database()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    container = get_container()
    await start_services(container)

    yield

    await stop_services(container)
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    application = FastAPI(
        title="Sherlock API",
        version="1.0.0",
        description="Face recognition and identity memory backend for a voice assistant",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(identity_router, prefix="/api/v1/identities")
    application.include_router(events_router, prefix="/api/v1/events")
    application.include_router(session_router, prefix="/api/v1/sessions")
    application.include_router(observation_router, prefix="/api/v1/observations")
    application.include_router(voice_agent_router, prefix="/api/v1/voice-agent")
    application.include_router(media_router, prefix="/api/v1/media")

    return application


# Create application instance
app = create_application()
