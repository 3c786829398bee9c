from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse, PlainTextResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.configs import file_logger, settings
from app.dependencies import AiDep, StorageDep, UserSessionDep
from app.managers import limiter
from app.schemas import (
    GenerateRequest,
    GenerationResult,
    Itinerary,
    ItineraryCreate,
    ItineraryUpdate,
    RefinementResult,
    RefineRequest,
    StoredItinerary,
)
from app.services.formatting import format_itinerary_text
from app.services.itinerary import generate_itinerary
from app.services.refinement import refine_itinerary

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/itineraries", tags=["🗺️ Itineraries"])


@router.post(
    "/generate",
    response_class=ORJSONResponse,
    summary="Generate an itinerary",
    response_model=GenerationResult,
)
@limiter.limit(settings.GENERATE_RATE_LIMIT)
async def generate(
    request: Request,
    response: Response,
    body: GenerateRequest,
    ai_client: AiDep,
) -> ORJSONResponse:
    """
    Generate a day-by-day itinerary from trip preferences.

    Always answers 200 with a usable itinerary: when the completion service
    is missing or fails, a demo itinerary is returned with ``isDemo`` set.
    """
    result = await generate_itinerary(body.preferences, ai_client)
    return ORJSONResponse(content=result.model_dump(mode="json", by_alias=True))


@router.post(
    "/refine",
    response_class=ORJSONResponse,
    summary="Refine an itinerary with a chat message",
    response_model=RefinementResult,
)
@limiter.limit(settings.REFINE_RATE_LIMIT)
async def refine(
    request: Request,
    response: Response,
    body: RefineRequest,
    ai_client: AiDep,
) -> ORJSONResponse:
    """
    Apply a plain-language change request ("make day one slower") to an itinerary.

    Always answers 200 with a reply and a usable itinerary: when the
    completion service is missing or fails, a keyword-based rewrite is
    returned with ``isDemo`` set.
    """
    result = await refine_itinerary(body.itinerary, body.preferences, body.message, ai_client)
    return ORJSONResponse(content=result.model_dump(mode="json", by_alias=True))


@router.post(
    "",
    response_class=ORJSONResponse,
    summary="Save an itinerary",
    response_model=StoredItinerary,
    status_code=HTTP_201_CREATED,
)
async def create_itinerary(
    body: ItineraryCreate,
    session: UserSessionDep,
    storage: StorageDep,
) -> ORJSONResponse:
    stored = await storage.save(session.user_id, body.itinerary, body.preferences)
    return ORJSONResponse(content=stored.model_dump(mode="json"), status_code=HTTP_201_CREATED)


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List saved itineraries",
    response_model=list[StoredItinerary],
)
async def list_itineraries(session: UserSessionDep, storage: StorageDep) -> ORJSONResponse:
    """Newest first."""
    rows = await storage.list(session.user_id)
    return ORJSONResponse(content=[row.model_dump(mode="json") for row in rows])


@router.get(
    "/{itinerary_id}",
    response_class=ORJSONResponse,
    summary="Get a saved itinerary",
    response_model=StoredItinerary,
)
async def get_itinerary(
    itinerary_id: str,
    session: UserSessionDep,
    storage: StorageDep,
) -> ORJSONResponse:
    stored = await storage.get(session.user_id, itinerary_id)
    return ORJSONResponse(content=stored.model_dump(mode="json"))


@router.get(
    "/{itinerary_id}/text",
    response_class=PlainTextResponse,
    summary="Export a saved itinerary as plain text",
)
async def get_itinerary_text(
    itinerary_id: str,
    session: UserSessionDep,
    storage: StorageDep,
) -> PlainTextResponse:
    stored = await storage.get(session.user_id, itinerary_id)
    return PlainTextResponse(format_itinerary_text(stored.to_itinerary()))


@router.patch(
    "/{itinerary_id}",
    response_class=ORJSONResponse,
    summary="Update fields of a saved itinerary",
    response_model=StoredItinerary,
)
async def update_itinerary(
    itinerary_id: str,
    body: ItineraryUpdate,
    session: UserSessionDep,
    storage: StorageDep,
) -> ORJSONResponse:
    """Only the fields present in the body are written."""
    stored = await storage.update(session.user_id, itinerary_id, body.to_fields())
    return ORJSONResponse(content=stored.model_dump(mode="json"))


@router.put(
    "/{itinerary_id}/document",
    response_class=ORJSONResponse,
    summary="Replace the whole itinerary document",
    response_model=StoredItinerary,
)
async def replace_document(
    itinerary_id: str,
    body: Itinerary,
    session: UserSessionDep,
    storage: StorageDep,
) -> ORJSONResponse:
    """
    Whole-document write used by auto-save and explicit save.

    No version check is made: concurrent writers overwrite each other and
    the last request to arrive wins.
    """
    stored = await storage.update_document(session.user_id, itinerary_id, body)
    return ORJSONResponse(content=stored.model_dump(mode="json"))


@router.delete(
    "/{itinerary_id}",
    summary="Delete a saved itinerary",
    status_code=HTTP_204_NO_CONTENT,
)
async def delete_itinerary(
    itinerary_id: str,
    session: UserSessionDep,
    storage: StorageDep,
) -> Response:
    await storage.delete(session.user_id, itinerary_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
