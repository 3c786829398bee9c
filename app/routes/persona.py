from logging import getLogger

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from app.configs import file_logger
from app.dependencies import PersonaDep, UserSessionDep
from app.schemas import StoredPersona, TravelPersona

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/personas", tags=["🧭 Personas"])


@router.get(
    "/me",
    response_class=ORJSONResponse,
    summary="Get my travel persona",
    response_model=TravelPersona,
)
async def get_persona(session: UserSessionDep, personas: PersonaDep) -> ORJSONResponse:
    """Empty answers when no persona has been saved yet."""
    persona = await personas.get(session.user_id)
    return ORJSONResponse(content=persona.model_dump(mode="json", by_alias=True))


@router.put(
    "/me",
    response_class=ORJSONResponse,
    summary="Save my travel persona",
    response_model=StoredPersona,
)
async def save_persona(
    body: TravelPersona,
    session: UserSessionDep,
    personas: PersonaDep,
) -> ORJSONResponse:
    """Replaces any earlier answers."""
    stored = await personas.save(session.user_id, body)
    return ORJSONResponse(content=stored.model_dump(mode="json"))


@router.delete(
    "/me",
    summary="Delete my travel persona",
    status_code=HTTP_204_NO_CONTENT,
)
async def delete_persona(session: UserSessionDep, personas: PersonaDep) -> Response:
    await personas.delete(session.user_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
