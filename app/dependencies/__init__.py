# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AiDep,
    CommentsDep,
    OptionalSessionDep,
    PersonaDep,
    SharingDep,
    StorageDep,
    StoreDep,
    UserSession,
    UserSessionDep,
    get_ai_client,
    get_comment_service,
    get_itinerary_storage,
    get_optional_user_session,
    get_persona_service,
    get_sharing_service,
    get_store,
    get_user_session,
)

__all__ = [
    "AiDep",
    "CommentsDep",
    "OptionalSessionDep",
    "PersonaDep",
    "SharingDep",
    "StorageDep",
    "StoreDep",
    "UserSession",
    "UserSessionDep",
    "get_ai_client",
    "get_comment_service",
    "get_itinerary_storage",
    "get_optional_user_session",
    "get_persona_service",
    "get_sharing_service",
    "get_store",
    "get_user_session",
]
