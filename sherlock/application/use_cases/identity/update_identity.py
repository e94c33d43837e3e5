# Standard library imports
import logging
from typing import Any, Dict

# Local application imports
from ....agents.exceptions import ValidationError
from ....domain.constants.identity_fields import IdentityFields
from ....domain.repositories.identity_repository import IdentityRepository
from ...dto.identity_dto import IdentityResponse, IdentityUpdateRequest
from .get_identity import identity_to_response

logger = logging.getLogger(__name__)


class UpdateIdentityUseCase:
    """
    Correct an identity's name, relationship status or profile fields.

    Used by the REST API and by the voice agent's update_identity tool.
    The stored face embedding is never touched here.
    """

    def __init__(self, identity_repository: IdentityRepository) -> None:
        self._identity_repository = identity_repository

    async def execute(self, identity_id: str, request: IdentityUpdateRequest) -> IdentityResponse:
        """
        Raises:
            ValidationError: no fields supplied
            LookupError: identity does not exist
        """
        updates: Dict[str, Any] = {}
        if request.name is not None:
            updates[IdentityFields.NAME] = request.name
        if request.relationship_status is not None:
            updates[IdentityFields.RELATIONSHIP_STATUS] = request.relationship_status
        if request.linkedin_url is not None:
            updates[IdentityFields.LINKEDIN_URL] = request.linkedin_url
        if request.metadata is not None:
            updates[IdentityFields.METADATA] = request.metadata

        if not updates:
            raise ValidationError(
                "No identity fields supplied",
                user_message="Provide at least one field to update.",
            )

        identity = await self._identity_repository.update(identity_id, updates)
        if identity is None:
            raise LookupError(f"Identity {identity_id} not found")

        logger.info(f"Updated identity {identity_id}: {sorted(updates)}")
        return identity_to_response(identity)
