"""
Share link service.

A share is a separate record keyed by a random ``share_id`` that points at
one itinerary. Anyone holding the id can read the itinerary; the share's
mode decides whether they may also edit and comment.
"""

from datetime import UTC, datetime
from logging import getLogger
from typing import Any
from uuid import uuid4

from app.clients.protocols import DocumentStoreProtocol
from app.configs.settings import ITINERARIES_TABLE, SHARES_TABLE, file_logger
from app.errors import RecordNotFoundError, ShareExpiredError, ShareNotFoundError
from app.rabc import Capability, ShareRole, require, role_for
from app.schemas.share import SharedItinerary, SharedItineraryView, ShareMode
from app.schemas.storage import StoredItinerary
from app.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))


def is_expired(share: SharedItinerary, now: datetime | None = None) -> bool:
    """Whether the share's expiry time has passed; naive times are taken as UTC."""
    if share.expires_at is None:
        return False
    expires_at = share.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    return expires_at <= (now or utc_now())


class SharingService:
    """Create, read, update and delete share links."""

    def __init__(self, store: DocumentStoreProtocol) -> None:
        self.store = store

    async def _load(self, share_id: str) -> SharedItinerary:
        rows = await self.store.select(SHARES_TABLE, {"share_id": share_id})
        if not rows:
            raise ShareNotFoundError()
        return SharedItinerary.model_validate(rows[0])

    def _check_not_expired(self, share: SharedItinerary, user_id: str | None) -> None:
        # Owners keep access to their own expired links
        if is_expired(share) and role_for(share, user_id) != ShareRole.OWNER:
            raise ShareExpiredError()

    async def role(self, share_id: str, user_id: str | None) -> ShareRole:
        """Role of ``user_id`` on the share."""
        return role_for(await self._load(share_id), user_id)

    async def create(
        self,
        user_id: str,
        itinerary_id: str,
        title: str = "",
        share_mode: ShareMode = "view",
        is_public: bool = False,
        expires_at: datetime | None = None,
    ) -> SharedItinerary:
        """
        Create a share link for one of the user's itineraries.

        Args:
            user_id: Owner of the itinerary, who becomes owner of the share.
            itinerary_id: Itinerary to share.
            title: Display title; defaults to the itinerary's title.
            share_mode: ``view`` or ``collaborate``.
            is_public: Whether the link may be listed publicly.
            expires_at: Optional expiry time.

        Returns:
            The new share, with a fresh ``share_id`` and ``view_count`` 0.

        Raises:
            RecordNotFoundError: If the user owns no itinerary with this id.
        """
        rows = await self.store.select(
            ITINERARIES_TABLE,
            {"id": itinerary_id, "user_id": user_id},
        )
        if not rows:
            raise RecordNotFoundError(detail=f"Itinerary '{itinerary_id}' not found")

        now = utc_now()
        row: dict[str, Any] = {
            "share_id": str(uuid4()),
            "user_id": user_id,
            "itinerary_id": itinerary_id,
            "title": title or rows[0].get("title") or "",
            "share_mode": share_mode,
            "is_public": is_public,
            "expires_at": expires_at,
            "view_count": 0,
            "created_at": now,
            "updated_at": now,
        }
        stored = await self.store.insert(SHARES_TABLE, row)
        logger.info(f"Share {row['share_id']} ({share_mode}) created for itinerary {itinerary_id}")
        return SharedItinerary.model_validate(stored)

    async def get(self, share_id: str, user_id: str | None = None) -> SharedItineraryView:
        """
        Resolve a share together with the itinerary it points at.

        Raises:
            ShareNotFoundError: If the share does not exist.
            ShareExpiredError: If the share expired and the caller is not its owner.
        """
        share = await self._load(share_id)
        self._check_not_expired(share, user_id)

        rows = await self.store.select(ITINERARIES_TABLE, {"id": share.itinerary_id})
        itinerary = StoredItinerary.model_validate(rows[0]) if rows else None
        return SharedItineraryView(**share.model_dump(), itinerary=itinerary)

    async def update(
        self,
        user_id: str,
        share_id: str,
        fields: dict[str, Any],
    ) -> SharedItinerary:
        """
        Change mode, visibility, title or expiry of a share. Owner only.

        Raises:
            ShareNotFoundError: If the share does not exist.
            PermissionDeniedError: If the caller does not own the share.
        """
        share = await self._load(share_id)
        require(role_for(share, user_id), Capability.MANAGE_SHARE)

        rows = await self.store.update(
            SHARES_TABLE,
            {"share_id": share_id, "user_id": user_id},
            {**fields, "updated_at": utc_now()},
        )
        if not rows:
            raise ShareNotFoundError()
        return SharedItinerary.model_validate(rows[0])

    async def delete(self, user_id: str, share_id: str) -> None:
        """Revoke a share link. Owner only."""
        share = await self._load(share_id)
        require(role_for(share, user_id), Capability.MANAGE_SHARE)

        await self.store.delete(SHARES_TABLE, {"share_id": share_id, "user_id": user_id})
        logger.info(f"Share {share_id} deleted by user {user_id}")

    async def view(self, share_id: str) -> int:
        """
        Record one view of a share.

        The counter is read and written back without locking, so concurrent
        views may be lost; the last write wins.

        Returns:
            The new view count.
        """
        share = await self._load(share_id)
        self._check_not_expired(share, None)

        count = share.view_count + 1
        await self.store.update(SHARES_TABLE, {"share_id": share_id}, {"view_count": count})
        return count

    async def list(self, user_id: str) -> list[SharedItinerary]:
        """Return the user's shares, newest first."""
        rows = await self.store.select(
            SHARES_TABLE,
            {"user_id": user_id},
            order_by="created_at",
            descending=True,
        )
        return [SharedItinerary.model_validate(row) for row in rows]
