"""
Seed a fresh database with demo data.

    python -m sherlock.seed

Creates the "Presenter" identity, opens an "Initial Demo Session" and logs a
first note into it. Safe to re-run: an existing Presenter is reused.
"""
import asyncio
import logging

from dotenv import load_dotenv

from .application.services.event_log import EventLog
from .application.services.session_manager import SessionManager
from .di.container import get_container
from .domain.models.event import EventType
from .domain.models.identity import Identity
from .domain.repositories.identity_repository import IdentityRepository
from .infrastructure.db.mongo_connection import close_database, ensure_indexes

logger = logging.getLogger(__name__)

PRESENTER_NAME = "Presenter"
DEMO_SESSION_TITLE = "Initial Demo Session"


async def seed() -> None:
    container = get_container()
    await ensure_indexes(container.get("database"))

    identities = container.get(IdentityRepository)
    existing = [i for i in await identities.list(limit=500, skip=0) if i.name == PRESENTER_NAME]
    if existing:
        presenter = existing[0]
        logger.info(f"Presenter already present: {presenter.id}")
    else:
        presenter = await identities.create(Identity(
            id=None,
            name=PRESENTER_NAME,
            relationship_status="Self",
            metadata={"note": "The person running the demo"},
        ))
        logger.info(f"Created presenter identity {presenter.id}")

    session = await container.get(SessionManager).start_new_session(DEMO_SESSION_TITLE)
    await container.get(EventLog).record(
        EventType.NOTES,
        "System initialized. Ready to scan faces.",
        session_id=session.id,
    )
    logger.info(f"Seeded session {session.id}")


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(seed())
    finally:
        close_database()


if __name__ == "__main__":
    main()
