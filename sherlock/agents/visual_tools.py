"""
Tools the conversational voice agent calls.

- get_visual_context: who the camera sees right now, as JSON text
- update_identity: correct the name / relationship of an identity

Both return plain strings; the agent reads them verbatim.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Callable, List, Optional

from google.adk.tools import FunctionTool

from ..application.dto.identity_dto import IdentityUpdateRequest
from ..application.services.visual_context_bus import VisualContextBus
from ..application.use_cases.identity.update_identity import UpdateIdentityUseCase
from ..domain.models.visual_context import VisualContextSnapshot
from .exceptions import SherlockError

logger = logging.getLogger(__name__)

NOBODY_IN_VIEW = "I don't see anyone clearly right now."
UPDATE_OK = "Identity updated successfully."
UPDATE_FAILED = "Failed to update identity."
UPDATE_ERROR = "Error updating identity."


def describe_visual_context(snapshot: Optional[VisualContextSnapshot], now: float) -> str:
    if snapshot is None or not snapshot.found:
        return NOBODY_IN_VIEW

    last_seen = snapshot.last_seen if snapshot.last_seen is not None else now
    return json.dumps({
        "id": snapshot.id,
        "name": snapshot.name or "Unknown Person",
        "status": snapshot.relationship_status or "Unknown",
        "last_seen_seconds_ago": max(0, int(round(now - last_seen))),
        "is_match": snapshot.found,
    })


class VisualContextTools:
    def __init__(
        self,
        bus: VisualContextBus,
        update_identity_use_case: UpdateIdentityUseCase,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._bus = bus
        self._update_identity_use_case = update_identity_use_case
        self._clock = clock

    async def get_visual_context(self) -> str:
        return describe_visual_context(self._bus.current(), self._clock())

    async def update_identity(
        self,
        identity_id: str,
        name: Optional[str] = None,
        relationship_status: Optional[str] = None,
    ) -> str:
        if not identity_id:
            return UPDATE_FAILED
        try:
            request = IdentityUpdateRequest(name=name, relationship_status=relationship_status)
            await self._update_identity_use_case.execute(identity_id, request)
        except (LookupError, ValueError, SherlockError) as e:
            # pydantic's ValidationError is a ValueError
            logger.warning(f"update_identity rejected for {identity_id}: {e}")
            return UPDATE_FAILED
        except Exception as e:
            logger.error(f"update_identity failed for {identity_id}: {e}", exc_info=True)
            return UPDATE_ERROR
        return UPDATE_OK


def create_visual_tools(tools: VisualContextTools) -> List[FunctionTool]:
    """Wrap the tools with the names and signatures the voice agent expects."""

    async def get_visual_context() -> str:
        """Returns the person currently in view of the camera, or a message that nobody is visible."""
        return await tools.get_visual_context()

    async def update_identity(
        identityId: str,
        name: Optional[str] = None,
        relationship_status: Optional[str] = None,
    ) -> str:
        """Updates the name and/or relationship status of the identity with the given identityId."""
        return await tools.update_identity(identityId, name=name, relationship_status=relationship_status)

    return [
        FunctionTool(get_visual_context),
        FunctionTool(update_identity),
    ]
