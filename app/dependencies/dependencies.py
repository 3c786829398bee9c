# app/dependencies/dependencies.py

"""Request-scoped dependencies: caller session, clients and services."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED

from app.clients.ai_client import AiClient
from app.clients.protocols import DocumentStoreProtocol
from app.services import CommentService, ItineraryStorage, PersonaService, SharingService


@dataclass(frozen=True)
class UserSession:
    """
    Identity of the caller for one request.

    The identity is opaque: it is issued by the authentication provider in
    front of this service and forwarded in the ``X-User-Id`` header.
    """

    user_id: str
    email: str | None = None


def get_optional_user_session(
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
    x_user_email: Annotated[str | None, Header(alias="X-User-Email")] = None,
) -> UserSession | None:
    """Session of the caller, or None for anonymous requests."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return UserSession(user_id=x_user_id.strip(), email=x_user_email)


def get_user_session(
    session: Annotated[UserSession | None, Depends(get_optional_user_session)],
) -> UserSession:
    """Session of the caller; rejects anonymous requests with 401."""
    if session is None:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return session


UserSessionDep = Annotated[UserSession, Depends(get_user_session)]
OptionalSessionDep = Annotated[UserSession | None, Depends(get_optional_user_session)]


def get_store(request: Request) -> DocumentStoreProtocol:
    return request.app.state.store


def get_ai_client(request: Request) -> AiClient | None:
    return getattr(request.app.state, "ai_client", None)


StoreDep = Annotated[DocumentStoreProtocol, Depends(get_store)]
AiDep = Annotated[AiClient | None, Depends(get_ai_client)]


def get_itinerary_storage(store: StoreDep) -> ItineraryStorage:
    return ItineraryStorage(store)


def get_sharing_service(store: StoreDep) -> SharingService:
    return SharingService(store)


def get_comment_service(store: StoreDep) -> CommentService:
    return CommentService(store)


def get_persona_service(store: StoreDep) -> PersonaService:
    return PersonaService(store)


StorageDep = Annotated[ItineraryStorage, Depends(get_itinerary_storage)]
SharingDep = Annotated[SharingService, Depends(get_sharing_service)]
CommentsDep = Annotated[CommentService, Depends(get_comment_service)]
PersonaDep = Annotated[PersonaService, Depends(get_persona_service)]
