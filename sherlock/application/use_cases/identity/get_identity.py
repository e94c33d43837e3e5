from typing import Optional

from ....domain.models.identity import Identity
from ....domain.repositories.identity_repository import IdentityRepository
from ...dto.identity_dto import IdentityResponse


def identity_to_response(identity: Identity) -> IdentityResponse:
    return IdentityResponse(
        id=identity.id or "",
        name=identity.name,
        relationship_status=identity.relationship_status,
        headshot_media_url=identity.headshot_media_url,
        linkedin_url=identity.linkedin_url,
        metadata=identity.metadata or {},
        created_at=identity.created_at,
        has_embedding=bool(identity.face_embedding),
    )


class GetIdentityUseCase:
    def __init__(self, identity_repository: IdentityRepository) -> None:
        self._identity_repository = identity_repository

    async def execute(self, identity_id: str) -> Optional[IdentityResponse]:
        identity = await self._identity_repository.get_by_id(identity_id)
        if identity is None:
            return None
        return identity_to_response(identity)
