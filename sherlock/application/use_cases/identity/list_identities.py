from ....domain.repositories.identity_repository import IdentityRepository
from ...dto.identity_dto import IdentityListResponse
from .get_identity import identity_to_response


class ListIdentitiesUseCase:
    def __init__(self, identity_repository: IdentityRepository) -> None:
        self._identity_repository = identity_repository

    async def execute(self, limit: int = 100, skip: int = 0) -> IdentityListResponse:
        identities = await self._identity_repository.list(limit=limit, skip=skip)
        return IdentityListResponse(
            total=len(identities),
            items=[identity_to_response(i) for i in identities],
        )
