from app.routes.comments import router as comments_router
from app.routes.itinerary import router as itinerary_router
from app.routes.persona import router as persona_router
from app.routes.share import router as share_router

__all__ = [
    "comments_router",
    "itinerary_router",
    "persona_router",
    "share_router",
]
