"""Comments on collaborative shares."""

from logging import getLogger
from types import EllipsisType
from typing import Any
from uuid import uuid4

from app.clients.protocols import DocumentStoreProtocol, Filters
from app.configs.settings import COMMENTS_TABLE, SHARES_TABLE, file_logger
from app.errors import (
    CommentNotFoundError,
    CommentsNotAllowedError,
    PermissionDeniedError,
    ShareNotFoundError,
)
from app.rabc import Capability, can, require, role_for
from app.schemas.share import Comment, SharedItinerary
from app.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))


class CommentService:
    """
    Create, list, delete and resolve comments scoped to one share.

    A comment targets one day (``day_index``, zero-based) or the whole trip
    (``day_index`` None).
    """

    def __init__(self, store: DocumentStoreProtocol) -> None:
        self.store = store

    async def _share(self, share_id: str) -> SharedItinerary:
        rows = await self.store.select(SHARES_TABLE, {"share_id": share_id})
        if not rows:
            raise ShareNotFoundError()
        return SharedItinerary.model_validate(rows[0])

    async def _comment(self, share_id: str, comment_id: str) -> Comment:
        rows = await self.store.select(COMMENTS_TABLE, {"id": comment_id, "share_id": share_id})
        if not rows:
            raise CommentNotFoundError()
        return Comment.model_validate(rows[0])

    async def create(
        self,
        share_id: str,
        user_email: str,
        content: str,
        day_index: int | None = None,
        user_id: str | None = None,
    ) -> Comment:
        """
        Post a comment.

        Raises:
            ShareNotFoundError: If the share does not exist.
            CommentsNotAllowedError: If the share is view-only.
        """
        share = await self._share(share_id)
        if share.share_mode != "collaborate":
            raise CommentsNotAllowedError()
        if not can(role_for(share, user_id), Capability.COMMENT):
            raise CommentsNotAllowedError()

        row: dict[str, Any] = {
            "id": str(uuid4()),
            "share_id": share_id,
            "user_email": user_email,
            "user_id": user_id,
            "content": content,
            "day_index": day_index,
            "is_resolved": False,
            "created_at": utc_now(),
        }
        stored = await self.store.insert(COMMENTS_TABLE, row)
        logger.info(f"Comment {row['id']} added to share {share_id}")
        return Comment.model_validate(stored)

    async def list(
        self,
        share_id: str,
        day_index: int | None | EllipsisType = ...,
    ) -> list[Comment]:
        """
        Return comments oldest first.

        Args:
            share_id: Share the comments belong to.
            day_index: ``...`` (default) for every comment, None for general
                comments only, or a day index for that day's comments.
        """
        filters: Filters = {"share_id": share_id}
        if day_index is not ...:
            filters = {**filters, "day_index": day_index}

        rows = await self.store.select(COMMENTS_TABLE, filters, order_by="created_at")
        return [Comment.model_validate(row) for row in rows]

    async def delete(self, share_id: str, comment_id: str, user_id: str | None) -> None:
        """
        Delete a comment. Allowed for its author and for the share owner.

        Raises:
            CommentNotFoundError: If the comment does not exist on the share.
            PermissionDeniedError: If the caller is neither author nor owner.
        """
        share = await self._share(share_id)
        comment = await self._comment(share_id, comment_id)

        is_author = user_id is not None and comment.user_id == user_id
        if not is_author and not can(role_for(share, user_id), Capability.DELETE_ANY_COMMENT):
            raise PermissionDeniedError(detail="Only the author or the share owner can delete")

        await self.store.delete(COMMENTS_TABLE, {"id": comment_id, "share_id": share_id})
        logger.info(f"Comment {comment_id} deleted from share {share_id}")

    async def resolve(self, share_id: str, comment_id: str, user_id: str | None) -> Comment:
        """
        Mark a comment resolved. Share owner only.

        Raises:
            PermissionDeniedError: If the caller does not own the share.
            CommentNotFoundError: If the comment does not exist on the share.
        """
        share = await self._share(share_id)
        require(role_for(share, user_id), Capability.RESOLVE_COMMENT)
        await self._comment(share_id, comment_id)

        rows = await self.store.update(
            COMMENTS_TABLE,
            {"id": comment_id, "share_id": share_id},
            {"is_resolved": True},
        )
        if not rows:
            raise CommentNotFoundError()
        return Comment.model_validate(rows[0])
