"""
Identities API: list, get, correct, and bulk-import identities.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
import logging

# -----------------------------------------------------------------------------
# Third-party
# -----------------------------------------------------------------------------
from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status

# -----------------------------------------------------------------------------
# Application
# -----------------------------------------------------------------------------
from ...agents.exceptions import ValidationError
from ...application.dto.identity_dto import (
    IdentityImportResponse,
    IdentityListResponse,
    IdentityResponse,
    IdentityUpdateRequest,
)
from ...application.use_cases.identity.get_identity import GetIdentityUseCase
from ...application.use_cases.identity.import_identities import ImportIdentitiesUseCase
from ...application.use_cases.identity.list_identities import ListIdentitiesUseCase
from ...application.use_cases.identity.update_identity import UpdateIdentityUseCase
from ...di.container import get_container

# -----------------------------------------------------------------------------
# Logging and router
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)
router = APIRouter(tags=["identities"])


@router.get("", response_model=IdentityListResponse)
async def list_identities(
    limit: int = Query(100, ge=1, le=500),
    skip: int = Query(0, ge=0),
) -> IdentityListResponse:
    use_case = get_container().get(ListIdentitiesUseCase)
    try:
        return await use_case.execute(limit=limit, skip=skip)
    except Exception as e:
        logger.error("Error listing identities: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to list identities")


@router.post("/import", response_model=IdentityImportResponse)
async def import_identities(file: UploadFile = File(...)) -> IdentityImportResponse:
    """
    Bulk import identities from a CSV file with columns
    name, linkedin_url, headshot_media_url (only name is required).
    """
    raw = await file.read()
    try:
        content = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CSV must be UTF-8 encoded")

    use_case = get_container().get(ImportIdentitiesUseCase)
    try:
        return await use_case.execute(content)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.user_message)
    except Exception as e:
        logger.error("Error importing identities: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to import identities")


@router.get("/{identity_id}", response_model=IdentityResponse)
async def get_identity(identity_id: str) -> IdentityResponse:
    use_case = get_container().get(GetIdentityUseCase)
    identity = await use_case.execute(identity_id)
    if identity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Identity not found")
    return identity


@router.patch("/{identity_id}", response_model=IdentityResponse)
async def update_identity(identity_id: str, request: IdentityUpdateRequest) -> IdentityResponse:
    use_case = get_container().get(UpdateIdentityUseCase)
    try:
        return await use_case.execute(identity_id, request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.user_message)
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Identity not found")
    except Exception as e:
        logger.error("Error updating identity %s: %s", identity_id, e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update identity")
