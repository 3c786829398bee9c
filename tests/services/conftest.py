# tests/services/conftest.py
"""Fixtures for service tests: services over a fresh in-memory store."""

from pytest import fixture

from app.clients.memory_client import MemoryClient
from app.schemas.itinerary import Itinerary
from app.schemas.storage import StoredItinerary
from app.services.comments import CommentService
from app.services.persona import PersonaService
from app.services.sharing import SharingService
from app.services.storage import ItineraryStorage

OWNER = "owner-1"
GUEST = "guest-1"


@fixture
def storage(store: MemoryClient) -> ItineraryStorage:
    return ItineraryStorage(store)


@fixture
def sharing(store: MemoryClient) -> SharingService:
    return SharingService(store)


@fixture
def comments(store: MemoryClient) -> CommentService:
    return CommentService(store)


@fixture
def personas(store: MemoryClient) -> PersonaService:
    return PersonaService(store)


@fixture
async def saved(storage: ItineraryStorage, itinerary: Itinerary) -> StoredItinerary:
    return await storage.save(OWNER, itinerary)
