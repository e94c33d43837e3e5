"""
Bulk identity import from CSV.

Expected header (case-insensitive): name, linkedin_url, headshot_media_url.
Only `name` is required. Rows without a headshot are skipped because an
identity without an embedding can never be matched.
"""
# Standard library imports
import csv
import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

# Local application imports
from ....agents.exceptions import ValidationError
from ....domain.models.identity import Identity
from ....domain.repositories.identity_repository import IdentityRepository
from ....infrastructure.external.headshot_embedder import HeadshotEmbedder
from ....utils.datetime_utils import to_iso, utc_now
from ...dto.identity_dto import IdentityImportResponse

logger = logging.getLogger(__name__)

NAME_COLUMN = "name"
LINKEDIN_COLUMN = "linkedin_url"
HEADSHOT_COLUMN = "headshot_media_url"


@dataclass
class ImportRow:
    name: str
    linkedin_url: Optional[str] = None
    headshot_media_url: Optional[str] = None


def parse_identity_csv(content: str) -> Tuple[List[ImportRow], List[str]]:
    """
    Parse CSV text into rows. Quoted fields may contain commas and doubled
    quotes. Blank lines are ignored.

    Returns:
        (rows, errors) where errors describes rows dropped for missing a name

    Raises:
        ValidationError: the header has no name column
    """
    reader = csv.reader(io.StringIO(content.lstrip("\ufeff").strip()))
    header = next(reader, None)
    if not header:
        raise ValidationError("CSV is empty", user_message="CSV must contain a 'name' column")

    columns = [h.strip().lower() for h in header]
    if NAME_COLUMN not in columns:
        raise ValidationError(
            "CSV header has no name column",
            user_message="CSV must contain a 'name' column",
        )

    def cell(values: List[str], column: str) -> Optional[str]:
        if column not in columns:
            return None
        idx = columns.index(column)
        if idx >= len(values):
            return None
        return values[idx].strip() or None

    rows: List[ImportRow] = []
    errors: List[str] = []
    for values in reader:
        if not any(v.strip() for v in values):
            continue
        name = cell(values, NAME_COLUMN)
        if not name:
            errors.append(f"Skipped line {reader.line_num}: missing name")
            continue
        rows.append(ImportRow(
            name=name,
            linkedin_url=cell(values, LINKEDIN_COLUMN),
            headshot_media_url=cell(values, HEADSHOT_COLUMN),
        ))
    return rows, errors


class ImportIdentitiesUseCase:
    def __init__(self, identity_repository: IdentityRepository, embedder: HeadshotEmbedder) -> None:
        self._identity_repository = identity_repository
        self._embedder = embedder

    async def execute(self, content: str) -> IdentityImportResponse:
        rows, parse_errors = parse_identity_csv(content)
        result = IdentityImportResponse(errors=list(parse_errors))
        imported_at = to_iso(utc_now())

        for row in rows:
            result.processed += 1
            if not row.headshot_media_url:
                result.skipped += 1
                continue

            try:
                embedding = await self._embedder.embed_from_url(row.headshot_media_url)
                if not embedding:
                    result.skipped += 1
                    result.errors.append(
                        f"Skipped {row.name}: Could not generate embedding from headshot URL"
                    )
                    continue

                await self._identity_repository.create(Identity(
                    id=None,
                    name=row.name,
                    linkedin_url=row.linkedin_url,
                    headshot_media_url=row.headshot_media_url,
                    face_embedding=embedding,
                    metadata={"imported_from_csv": True, "imported_at": imported_at},
                ))
                result.created += 1
            except Exception as e:
                logger.error(f"Error importing {row.name}: {e}")
                result.errors.append(f"Error processing {row.name}: {e}")
                result.success = False

        logger.info(
            f"CSV import finished: processed={result.processed} created={result.created} "
            f"skipped={result.skipped} errors={len(result.errors)}"
        )
        return result
