from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.configs import file_logger
from app.dependencies import CommentsDep, OptionalSessionDep, UserSessionDep
from app.schemas import Comment, CommentCreate

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/shares/{share_id}/comments", tags=["💬 Comments"])


@router.post(
    "",
    response_class=ORJSONResponse,
    summary="Comment on a collaborative share",
    response_model=Comment,
    status_code=HTTP_201_CREATED,
)
async def create_comment(
    share_id: str,
    body: CommentCreate,
    session: OptionalSessionDep,
    comments: CommentsDep,
) -> ORJSONResponse:
    """Only shares in ``collaborate`` mode accept comments."""
    comment = await comments.create(
        share_id,
        body.user_email,
        body.content,
        day_index=body.day_index,
        user_id=session.user_id if session else None,
    )
    return ORJSONResponse(content=comment.model_dump(mode="json"), status_code=HTTP_201_CREATED)


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List comments on a share",
    response_model=list[Comment],
)
async def list_comments(
    share_id: str,
    comments: CommentsDep,
    day_index: Annotated[int | None, Query(ge=0, description="Only this day's comments")] = None,
    general: Annotated[bool, Query(description="Only comments about the whole trip")] = False,
) -> ORJSONResponse:
    """Oldest first. ``general`` takes precedence over ``day_index``."""
    if general:
        rows = await comments.list(share_id, None)
    elif day_index is not None:
        rows = await comments.list(share_id, day_index)
    else:
        rows = await comments.list(share_id)
    return ORJSONResponse(content=[row.model_dump(mode="json") for row in rows])


@router.delete(
    "/{comment_id}",
    summary="Delete a comment",
    status_code=HTTP_204_NO_CONTENT,
)
async def delete_comment(
    share_id: str,
    comment_id: str,
    session: UserSessionDep,
    comments: CommentsDep,
) -> Response:
    """Allowed for the comment's author and the share owner."""
    await comments.delete(share_id, comment_id, session.user_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post(
    "/{comment_id}/resolve",
    response_class=ORJSONResponse,
    summary="Resolve a comment",
    response_model=Comment,
)
async def resolve_comment(
    share_id: str,
    comment_id: str,
    session: UserSessionDep,
    comments: CommentsDep,
) -> ORJSONResponse:
    """Share owner only."""
    comment = await comments.resolve(share_id, comment_id, session.user_id)
    return ORJSONResponse(content=comment.model_dump(mode="json"))
