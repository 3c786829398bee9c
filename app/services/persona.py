"""
Travel persona persistence.

One row per user in the ``user_personas`` table. Saving replaces the
previous answers; reading a user without a row yields an empty persona.
"""

from logging import getLogger
from typing import Any
from uuid import uuid4

from app.clients.protocols import DocumentStoreProtocol
from app.configs.settings import PERSONAS_TABLE, file_logger
from app.schemas.itinerary import TravelPersona
from app.schemas.persona import StoredPersona, persona_fields
from app.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))


class PersonaService:
    """Upsert, read and delete the caller's travel persona."""

    def __init__(self, store: DocumentStoreProtocol) -> None:
        self.store = store

    async def _find(self, user_id: str) -> StoredPersona | None:
        rows = await self.store.select(PERSONAS_TABLE, {"user_id": user_id})
        return StoredPersona.model_validate(rows[0]) if rows else None

    async def save(self, user_id: str, persona: TravelPersona) -> StoredPersona:
        """
        Store the user's persona, replacing any earlier answers.

        Returns:
            The stored row.
        """
        now = utc_now()
        fields = persona_fields(persona)

        if await self._find(user_id) is not None:
            rows = await self.store.update(
                PERSONAS_TABLE,
                {"user_id": user_id},
                {**fields, "updated_at": now},
            )
            if rows:
                logger.info(f"Persona updated for user {user_id}")
                return StoredPersona.model_validate(rows[0])

        row: dict[str, Any] = {
            "id": str(uuid4()),
            "user_id": user_id,
            **fields,
            "created_at": now,
            "updated_at": now,
        }
        stored = await self.store.insert(PERSONAS_TABLE, row)
        logger.info(f"Persona created for user {user_id}")
        return StoredPersona.model_validate(stored)

    async def get(self, user_id: str) -> TravelPersona:
        """Return the user's persona, or an empty one if none was saved."""
        stored = await self._find(user_id)
        return stored.to_persona() if stored else TravelPersona()

    async def delete(self, user_id: str) -> bool:
        """
        Remove the user's persona.

        Returns:
            Whether a row was deleted.
        """
        removed = await self.store.delete(PERSONAS_TABLE, {"user_id": user_id})
        if removed:
            logger.info(f"Persona deleted for user {user_id}")
        return bool(removed)
