# tests/managers/test_edit_session.py
"""Tests for EditSession: editing mode, auto-save, explicit save, cancel and close."""

from asyncio import sleep
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import MockTransport, Response

from app.clients.supabase_client import SupabaseClient
from app.configs.settings import DEFAULT_TIP, SAVE_ERROR_MESSAGE
from app.errors import EditorIndexError, PermissionDeniedError, StoreConnectionError
from app.managers.circuit_breaker import store_circuit_breaker
from app.managers.edit_session import EditSession, SaveOutcome
from app.rabc import ShareRole
from app.schemas.itinerary import Itinerary
from app.services.storage import ItineraryStorage

DELAY = 0.05


@pytest.fixture
def storage() -> MagicMock:
    storage = MagicMock(spec=ItineraryStorage)
    storage.update_document = AsyncMock()
    return storage


@pytest.fixture
def session(itinerary: Itinerary, storage: MagicMock) -> EditSession:
    return EditSession(
        itinerary,
        storage=storage,
        user_id="user-1",
        itinerary_id="itin-1",
        debounce_seconds=DELAY,
    )


def test_initial_state(session: EditSession, itinerary: Itinerary) -> None:
    assert session.is_attached
    assert not session.is_editing
    assert not session.is_dirty
    assert session.document is itinerary
    assert session.original is itinerary


def test_detached_without_identity(itinerary: Itinerary) -> None:
    assert not EditSession(itinerary).is_attached


@pytest.mark.asyncio
async def test_edits_autosave_latest_document(
    session: EditSession,
    storage: MagicMock,
) -> None:
    session.start_editing()
    session.update_field("title", "Renamed")
    session.add_tip()
    session.reorder_days(2, 0)

    assert session.autosave_pending
    await sleep(DELAY * 3)

    storage.update_document.assert_awaited_once_with("user-1", "itin-1", session.document)
    written = storage.update_document.await_args.args[2]
    assert written.title == "Renamed"
    assert written.tips[-1] == DEFAULT_TIP
    assert [day.day for day in written.days] == [1, 2, 3]


@pytest.mark.asyncio
async def test_no_autosave_outside_editing_mode(
    session: EditSession,
    storage: MagicMock,
) -> None:
    session.update_tip(0, "changed")
    await sleep(DELAY * 3)

    storage.update_document.assert_not_awaited()
    assert session.is_dirty


@pytest.mark.asyncio
async def test_save_success(session: EditSession, storage: MagicMock) -> None:
    session.start_editing()
    session.add_activity(0)

    outcome = await session.save()

    assert outcome.success is True
    assert outcome.error is None
    assert not session.is_editing
    assert not session.is_dirty
    assert not session.autosave_pending
    storage.update_document.assert_awaited_once()


@pytest.mark.asyncio
async def test_save_failure_keeps_edits(session: EditSession, storage: MagicMock) -> None:
    storage.update_document.side_effect = StoreConnectionError()
    session.start_editing()
    edited = session.remove_tip(0)

    outcome = await session.save()

    assert outcome.success is False
    assert outcome.error == StoreConnectionError().detail
    assert session.is_editing
    assert session.document is edited
    assert session.is_dirty


@pytest.mark.asyncio
async def test_save_against_gateway_page_fails_cleanly(itinerary: Itinerary) -> None:
    store_circuit_breaker.reset_sync()
    client = SupabaseClient(
        url="https://project.supabase.co",
        service_key="service-key",
        transport=MockTransport(lambda request: Response(200, text="<html>gateway</html>")),
    )
    session = EditSession(
        itinerary,
        storage=ItineraryStorage(client),
        user_id="user-1",
        itinerary_id="itin-1",
        debounce_seconds=DELAY,
    )
    session.start_editing()
    edited = session.add_tip()

    outcome = await session.save()
    await client.close()

    assert outcome.success is False
    assert "non-JSON" in (outcome.error or "")
    assert session.is_editing
    assert session.document is edited


@pytest.mark.asyncio
async def test_save_unexpected_error_returns_outcome(
    session: EditSession,
    storage: MagicMock,
) -> None:
    storage.update_document.side_effect = ValueError("bad row")
    session.start_editing()
    session.add_tip()

    outcome = await session.save()

    assert outcome == SaveOutcome(success=False, error=SAVE_ERROR_MESSAGE)
    assert session.is_editing
    assert session.is_dirty


@pytest.mark.asyncio
async def test_cancel_reverts_and_drops_autosave(
    session: EditSession,
    storage: MagicMock,
    itinerary: Itinerary,
) -> None:
    session.start_editing()
    session.edit_day(0, "notes", "changed")

    session.cancel()
    await sleep(DELAY * 3)

    assert session.document is itinerary
    assert not session.is_editing
    storage.update_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_close_flushes_pending_autosave(
    itinerary: Itinerary,
    storage: MagicMock,
) -> None:
    session = EditSession(
        itinerary,
        storage=storage,
        user_id="user-1",
        itinerary_id="itin-1",
        debounce_seconds=10.0,
    )
    session.start_editing()
    session.update_activity(1, 0, "Dudhsagar falls")

    await session.close()

    storage.update_document.assert_awaited_once_with("user-1", "itin-1", session.document)


@pytest.mark.asyncio
async def test_detached_save_is_local(itinerary: Itinerary) -> None:
    session = EditSession(itinerary)
    session.start_editing()
    edited = session.add_tip("Local only")

    outcome = await session.save()

    assert outcome.success is True
    assert session.original is edited


def test_viewer_cannot_edit(itinerary: Itinerary) -> None:
    session = EditSession(itinerary, role=ShareRole.VIEWER)

    with pytest.raises(PermissionDeniedError):
        session.start_editing()
    with pytest.raises(PermissionDeniedError):
        session.add_tip()
    assert session.document is itinerary


def test_collaborator_can_edit(itinerary: Itinerary) -> None:
    session = EditSession(itinerary, role=ShareRole.COLLABORATOR)
    session.start_editing()
    assert session.remove_activity(0, 0).days[0].activities == ["Activity 1b"]


def test_bad_index_leaves_document_untouched(session: EditSession, itinerary: Itinerary) -> None:
    session.start_editing()
    with pytest.raises(EditorIndexError):
        session.remove_tip(10)
    assert session.document is itinerary
    assert not session.autosave_pending
