from app.schemas.health import CircuitBreakerStatus, HealthCheckResponse, ServicesStatus
from app.schemas.itinerary import (
    Day,
    GenerateRequest,
    GenerationResult,
    Itinerary,
    Meals,
    RefinementResult,
    RefineRequest,
    TravelPersona,
    TravelPreferences,
)
from app.schemas.persona import StoredPersona
from app.schemas.share import (
    Comment,
    CommentCreate,
    SharedItinerary,
    SharedItineraryView,
    ShareCreate,
    ShareMode,
    ShareUpdate,
)
from app.schemas.storage import (
    ItineraryCreate,
    ItineraryUpdate,
    StoredItinerary,
    document_fields,
)

__all__ = [
    "CircuitBreakerStatus",
    "Comment",
    "CommentCreate",
    "Day",
    "GenerateRequest",
    "GenerationResult",
    "HealthCheckResponse",
    "Itinerary",
    "ItineraryCreate",
    "ItineraryUpdate",
    "Meals",
    "RefineRequest",
    "RefinementResult",
    "ServicesStatus",
    "ShareCreate",
    "ShareMode",
    "ShareUpdate",
    "SharedItinerary",
    "SharedItineraryView",
    "StoredItinerary",
    "StoredPersona",
    "TravelPersona",
    "TravelPreferences",
    "document_fields",
]
