# Standard library imports
from typing import Any, Dict, List, Optional, Sequence, Tuple

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument

# Local application imports
from ...domain.repositories.identity_repository import IdentityRepository
from ...domain.models.identity import Identity
from ...domain.constants import IdentityFields
from ...utils.datetime_utils import ensure_utc, utc_now
from ...utils.face_embedding import find_nearest
from .mongo_connection import get_identity_collection

_UPDATABLE_FIELDS = frozenset({
    IdentityFields.NAME,
    IdentityFields.RELATIONSHIP_STATUS,
    IdentityFields.HEADSHOT_MEDIA_URL,
    IdentityFields.LINKEDIN_URL,
    IdentityFields.METADATA,
})


class MongoIdentityRepository(IdentityRepository):
    """MongoDB implementation of IdentityRepository"""

    def __init__(self, identity_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.identity_collection = (
            identity_collection if identity_collection is not None else get_identity_collection()
        )

    async def create(self, identity: Identity) -> Identity:
        if not identity:
            raise ValueError("Identity cannot be None")

        doc = {
            IdentityFields.NAME: identity.name,
            IdentityFields.RELATIONSHIP_STATUS: identity.relationship_status,
            IdentityFields.FACE_EMBEDDING: identity.face_embedding,
            IdentityFields.HEADSHOT_MEDIA_URL: identity.headshot_media_url,
            IdentityFields.LINKEDIN_URL: identity.linkedin_url,
            IdentityFields.METADATA: identity.metadata or {},
            IdentityFields.CREATED_AT: identity.created_at or utc_now(),
        }

        try:
            result = await self.identity_collection.insert_one(doc)
        except Exception as e:
            raise RuntimeError(f"Error creating identity: {str(e)}")

        doc[IdentityFields.MONGO_ID] = result.inserted_id
        return self._document_to_identity(doc)

    async def get_by_id(self, identity_id: str) -> Optional[Identity]:
        object_id = self._to_object_id(identity_id)
        if object_id is None:
            return None

        try:
            doc = await self.identity_collection.find_one({IdentityFields.MONGO_ID: object_id})
        except Exception as e:
            raise RuntimeError(f"Error finding identity by ID: {str(e)}")
        if not doc:
            return None
        return self._document_to_identity(doc)

    async def update(self, identity_id: str, updates: Dict[str, Any]) -> Optional[Identity]:
        object_id = self._to_object_id(identity_id)
        if object_id is None:
            return None

        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        if not updates:
            return await self.get_by_id(identity_id)

        try:
            doc = await self.identity_collection.find_one_and_update(
                {IdentityFields.MONGO_ID: object_id},
                {"$set": dict(updates)},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            raise RuntimeError(f"Error updating identity: {str(e)}")
        if not doc:
            return None
        return self._document_to_identity(doc)

    async def find_nearest(self, embedding: Sequence[float]) -> Optional[Tuple[Identity, float]]:
        # Brute-force cosine scan over every stored embedding; the collection
        # holds one document per known person.
        query = {IdentityFields.FACE_EMBEDDING: {"$ne": None}}
        docs: List[dict] = []
        try:
            async for doc in self.identity_collection.find(query):
                docs.append(doc)
        except Exception as e:
            raise RuntimeError(f"Error scanning identity embeddings: {str(e)}")

        best = find_nearest(
            embedding,
            [(index, doc[IdentityFields.FACE_EMBEDDING]) for index, doc in enumerate(docs)],
        )
        if best is None:
            return None
        index, similarity = best
        return self._document_to_identity(docs[index]), similarity

    async def list(self, limit: int, skip: int) -> List[Identity]:
        cursor = (
            self.identity_collection.find({})
            .sort([(IdentityFields.CREATED_AT, DESCENDING)])
            .skip(max(0, int(skip)))
            .limit(max(1, int(limit)))
        )

        items: List[Identity] = []
        async for doc in cursor:
            items.append(self._document_to_identity(doc))
        return items

    @staticmethod
    def _to_object_id(identity_id: str) -> Optional[ObjectId]:
        if not identity_id:
            return None
        try:
            return ObjectId(identity_id)
        except (InvalidId, ValueError, TypeError):
            return None

    def _document_to_identity(self, doc: dict) -> Identity:
        return Identity(
            id=str(doc.get(IdentityFields.MONGO_ID)),
            name=doc.get(IdentityFields.NAME) or "Unknown",
            relationship_status=doc.get(IdentityFields.RELATIONSHIP_STATUS),
            face_embedding=doc.get(IdentityFields.FACE_EMBEDDING),
            headshot_media_url=doc.get(IdentityFields.HEADSHOT_MEDIA_URL),
            linkedin_url=doc.get(IdentityFields.LINKEDIN_URL),
            metadata=doc.get(IdentityFields.METADATA) or {},
            created_at=ensure_utc(doc.get(IdentityFields.CREATED_AT)),
        )
