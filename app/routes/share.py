from logging import getLogger

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.configs import file_logger
from app.dependencies import OptionalSessionDep, SharingDep, UserSessionDep
from app.schemas import SharedItinerary, SharedItineraryView, ShareCreate, ShareUpdate

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/shares", tags=["🔗 Shares"])


@router.post(
    "",
    response_class=ORJSONResponse,
    summary="Create a share link",
    response_model=SharedItinerary,
    status_code=HTTP_201_CREATED,
)
async def create_share(
    body: ShareCreate,
    session: UserSessionDep,
    sharing: SharingDep,
) -> ORJSONResponse:
    share = await sharing.create(
        session.user_id,
        body.itinerary_id,
        title=body.title,
        share_mode=body.share_mode,
        is_public=body.is_public,
        expires_at=body.expires_at,
    )
    return ORJSONResponse(content=share.model_dump(mode="json"), status_code=HTTP_201_CREATED)


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List my share links",
    response_model=list[SharedItinerary],
)
async def list_shares(session: UserSessionDep, sharing: SharingDep) -> ORJSONResponse:
    shares = await sharing.list(session.user_id)
    return ORJSONResponse(content=[share.model_dump(mode="json") for share in shares])


@router.get(
    "/{share_id}",
    response_class=ORJSONResponse,
    summary="Open a shared itinerary",
    response_model=SharedItineraryView,
)
async def get_share(
    share_id: str,
    session: OptionalSessionDep,
    sharing: SharingDep,
) -> ORJSONResponse:
    """Anyone holding the share id may read; expired links answer 410 except to the owner."""
    view = await sharing.get(share_id, session.user_id if session else None)
    return ORJSONResponse(content=view.model_dump(mode="json"))


@router.patch(
    "/{share_id}",
    response_class=ORJSONResponse,
    summary="Update a share link",
    response_model=SharedItinerary,
)
async def update_share(
    share_id: str,
    body: ShareUpdate,
    session: UserSessionDep,
    sharing: SharingDep,
) -> ORJSONResponse:
    share = await sharing.update(session.user_id, share_id, body.model_dump(exclude_unset=True))
    return ORJSONResponse(content=share.model_dump(mode="json"))


@router.delete(
    "/{share_id}",
    summary="Revoke a share link",
    status_code=HTTP_204_NO_CONTENT,
)
async def delete_share(
    share_id: str,
    session: UserSessionDep,
    sharing: SharingDep,
) -> Response:
    await sharing.delete(session.user_id, share_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post(
    "/{share_id}/views",
    response_class=ORJSONResponse,
    summary="Record a view of a shared itinerary",
)
async def record_view(share_id: str, sharing: SharingDep) -> ORJSONResponse:
    count = await sharing.view(share_id)
    return ORJSONResponse(content={"share_id": share_id, "view_count": count})
