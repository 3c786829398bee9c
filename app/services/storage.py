"""
Itinerary persistence service.

Pass-through CRUD over the ``itineraries`` table of the document store.
Every record is scoped by ``user_id``: a row belonging to someone else is
indistinguishable from a missing one.
"""

from logging import getLogger
from typing import Any
from uuid import uuid4

from app.clients.protocols import DocumentStoreProtocol
from app.configs.settings import ITINERARIES_TABLE, file_logger
from app.errors import RecordNotFoundError
from app.schemas.itinerary import Itinerary, TravelPreferences
from app.schemas.storage import StoredItinerary, document_fields
from app.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))


class ItineraryStorage:
    """Service for saving, loading and deleting a user's itineraries."""

    def __init__(self, store: DocumentStoreProtocol) -> None:
        self.store = store

    @staticmethod
    def _not_found(itinerary_id: str) -> RecordNotFoundError:
        return RecordNotFoundError(detail=f"Itinerary '{itinerary_id}' not found")

    async def save(
        self,
        user_id: str,
        itinerary: Itinerary,
        preferences: TravelPreferences | None = None,
    ) -> StoredItinerary:
        """
        Persist a new itinerary.

        Args:
            user_id: Owner of the record.
            itinerary: Document to store.
            preferences: Preferences the document was generated from, if any.

        Returns:
            The stored record, with its server-side id.
        """
        now = utc_now()
        row: dict[str, Any] = {
            "id": str(uuid4()),
            "user_id": user_id,
            **document_fields(itinerary),
            "origin": None,
            "start_date": None,
            "end_date": None,
            "preferences": None,
            "created_at": now,
            "updated_at": now,
        }
        if preferences is not None:
            row |= {
                "origin": preferences.origin,
                "start_date": preferences.start_date.isoformat(),
                "end_date": preferences.end_date.isoformat(),
                "preferences": {
                    **preferences.model_dump(mode="json", by_alias=True),
                    "interests": preferences.effective_interests,
                },
            }

        stored = await self.store.insert(ITINERARIES_TABLE, row)
        logger.info(f"Itinerary {row['id']} saved for user {user_id}")
        return StoredItinerary.model_validate(stored)

    async def list(self, user_id: str) -> list[StoredItinerary]:
        """Return the user's itineraries, newest first."""
        rows = await self.store.select(
            ITINERARIES_TABLE,
            {"user_id": user_id},
            order_by="created_at",
            descending=True,
        )
        return [StoredItinerary.model_validate(row) for row in rows]

    async def get(self, user_id: str, itinerary_id: str) -> StoredItinerary:
        """
        Load one itinerary.

        Raises:
            RecordNotFoundError: If the user has no itinerary with this id.
        """
        rows = await self.store.select(
            ITINERARIES_TABLE,
            {"id": itinerary_id, "user_id": user_id},
        )
        if not rows:
            raise self._not_found(itinerary_id)
        return StoredItinerary.model_validate(rows[0])

    async def update(
        self,
        user_id: str,
        itinerary_id: str,
        fields: dict[str, Any],
    ) -> StoredItinerary:
        """
        Apply a partial update and bump ``updated_at``.

        Raises:
            RecordNotFoundError: If the user has no itinerary with this id.
        """
        changes = {**fields, "updated_at": utc_now()}
        rows = await self.store.update(
            ITINERARIES_TABLE,
            {"id": itinerary_id, "user_id": user_id},
            changes,
        )
        if not rows:
            raise self._not_found(itinerary_id)
        logger.debug(f"Itinerary {itinerary_id} updated: {sorted(fields)}")
        return StoredItinerary.model_validate(rows[0])

    async def update_document(
        self,
        user_id: str,
        itinerary_id: str,
        itinerary: Itinerary,
    ) -> StoredItinerary:
        """Overwrite the stored document with ``itinerary`` as a whole."""
        return await self.update(user_id, itinerary_id, document_fields(itinerary))

    async def delete(self, user_id: str, itinerary_id: str) -> None:
        """
        Delete one itinerary.

        Raises:
            RecordNotFoundError: If the user has no itinerary with this id.
        """
        removed = await self.store.delete(
            ITINERARIES_TABLE,
            {"id": itinerary_id, "user_id": user_id},
        )
        if not removed:
            raise self._not_found(itinerary_id)
        logger.info(f"Itinerary {itinerary_id} deleted by user {user_id}")
