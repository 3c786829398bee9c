from app.services.comments import CommentService
from app.services.itinerary import generate_itinerary
from app.services.persona import PersonaService
from app.services.refinement import refine_itinerary
from app.services.sharing import SharingService
from app.services.storage import ItineraryStorage

__all__ = [
    "CommentService",
    "ItineraryStorage",
    "PersonaService",
    "SharingService",
    "generate_itinerary",
    "refine_itinerary",
]
