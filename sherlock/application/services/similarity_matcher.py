"""Nearest-identity lookup with a single acceptance threshold."""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...domain.models.identity import Identity
from ...domain.repositories.identity_repository import IdentityRepository
from ...utils.face_embedding import normalize_embedding
from ...utils.timeouts import with_timeout

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    identity: Identity
    similarity: float


class SimilarityMatcher:
    """
    Asks the identity store for the single closest identity and accepts it
    when its cosine similarity reaches the threshold.

    Store failures and timeouts degrade to "no match" so the caller falls
    through to identity creation: a duplicate identity can be merged later,
    a lost sighting cannot be recovered.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        threshold: float = 0.7,
        embedding_dimension: int = 1024,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Match threshold must be within [0, 1], got {threshold}")
        self._identity_repository = identity_repository
        self.threshold = threshold
        self._embedding_dimension = embedding_dimension
        self._timeout_seconds = timeout_seconds

    async def match(self, embedding: Sequence[float]) -> Optional[MatchResult]:
        query = normalize_embedding(embedding, self._embedding_dimension)
        try:
            nearest = await with_timeout(
                self._identity_repository.find_nearest(query),
                self._timeout_seconds,
                "find_nearest",
            )
        except Exception as e:
            logger.warning(f"Identity lookup failed, treating as no match: {e}")
            return None

        if nearest is None:
            return None

        identity, similarity = nearest
        if similarity < self.threshold:
            logger.debug(
                f"Closest identity {identity.id} below threshold "
                f"({similarity:.3f} < {self.threshold:.3f})"
            )
            return None
        return MatchResult(identity=identity, similarity=similarity)
