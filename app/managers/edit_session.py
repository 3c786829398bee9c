# app/managers/edit_session.py
"""
Editing session over one itinerary document.

The session keeps two documents: the pristine one last known to be saved
and the working copy being edited. Every edit goes through the pure
functions in ``app.services.editor`` and, while the session is attached to
a stored itinerary, schedules a debounced auto-save of the whole working
copy.

Lifecycle:
    start_editing -> edits (auto-saved) -> save | cancel
    close() flushes a pending auto-save; nothing is lost on teardown.
"""

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import Any

from app.configs import file_logger, settings
from app.configs.settings import DEFAULT_ACTIVITY, DEFAULT_TIP, SAVE_ERROR_MESSAGE
from app.errors import BaseAppError
from app.managers.debounce import DebouncedSaver
from app.rabc import Capability, ShareRole, require
from app.schemas.itinerary import Itinerary
from app.services import editor
from app.services.storage import ItineraryStorage

logger = file_logger(getLogger(__name__))

type Edit = Callable[[Itinerary], Itinerary]


@dataclass(frozen=True)
class SaveOutcome:
    """Result of an explicit save."""

    success: bool
    error: str | None = None


class EditSession:
    """
    Editable itinerary bound to an optional stored identity.

    Example:
        >>> session = EditSession(doc, storage=storage, user_id="u1", itinerary_id="i1")
        >>> session.start_editing()
        >>> session.add_tip()
        >>> outcome = await session.save()
    """

    def __init__(
        self,
        itinerary: Itinerary,
        *,
        storage: ItineraryStorage | None = None,
        user_id: str | None = None,
        itinerary_id: str | None = None,
        role: ShareRole = ShareRole.OWNER,
        debounce_seconds: float = settings.AUTOSAVE_DEBOUNCE_SECONDS,
    ) -> None:
        self._original = itinerary
        self._document = itinerary
        self._editing = False
        self._storage = storage
        self._user_id = user_id
        self._itinerary_id = itinerary_id
        self._role = role
        self._saver: DebouncedSaver[Itinerary] = DebouncedSaver(
            self._write,
            delay=debounce_seconds,
            name=f"autosave:{itinerary_id or 'local'}",
        )

    @property
    def original(self) -> Itinerary:
        return self._original

    @property
    def document(self) -> Itinerary:
        return self._document

    @property
    def role(self) -> ShareRole:
        return self._role

    @property
    def is_editing(self) -> bool:
        return self._editing

    @property
    def is_attached(self) -> bool:
        """Whether edits are persisted to a stored itinerary."""
        return (
            self._storage is not None
            and self._user_id is not None
            and self._itinerary_id is not None
        )

    @property
    def autosave_pending(self) -> bool:
        return self._saver.pending

    @property
    def is_dirty(self) -> bool:
        return self._document is not self._original

    async def _write(self, itinerary: Itinerary) -> None:
        if not self.is_attached:
            return
        await self._storage.update_document(  # type: ignore[union-attr]
            self._user_id,  # type: ignore[arg-type]
            self._itinerary_id,  # type: ignore[arg-type]
            itinerary,
        )

    def start_editing(self) -> None:
        """Enter editing mode."""
        require(self._role, Capability.EDIT)
        self._editing = True

    def apply(self, edit: Edit) -> Itinerary:
        """
        Apply one edit to the working copy.

        Args:
            edit: Pure function from document to document, typically a
                partial of an ``app.services.editor`` operation.

        Returns:
            The new working copy.

        Raises:
            PermissionDeniedError: If the session's role cannot edit.
            EditorIndexError: If the edit addresses a missing position.
        """
        require(self._role, Capability.EDIT)
        self._document = edit(self._document)
        if self._editing and self.is_attached:
            self._saver.schedule(self._document)
        return self._document

    # --- Convenience edits ---

    def update_field(self, field: str, value: Any) -> Itinerary:  # noqa: ANN401
        return self.apply(lambda doc: editor.update_field(doc, field, value))

    def edit_day(self, day_index: int, field: str, value: Any) -> Itinerary:  # noqa: ANN401
        return self.apply(lambda doc: editor.edit_day(doc, day_index, field, value))

    def add_activity(self, day_index: int, placeholder: str = DEFAULT_ACTIVITY) -> Itinerary:
        return self.apply(lambda doc: editor.add_activity(doc, day_index, placeholder))

    def remove_activity(self, day_index: int, activity_index: int) -> Itinerary:
        return self.apply(lambda doc: editor.remove_activity(doc, day_index, activity_index))

    def update_activity(self, day_index: int, activity_index: int, value: str) -> Itinerary:
        return self.apply(
            lambda doc: editor.update_activity(doc, day_index, activity_index, value),
        )

    def add_tip(self, placeholder: str = DEFAULT_TIP) -> Itinerary:
        return self.apply(lambda doc: editor.add_tip(doc, placeholder))

    def remove_tip(self, tip_index: int) -> Itinerary:
        return self.apply(lambda doc: editor.remove_tip(doc, tip_index))

    def update_tip(self, tip_index: int, value: str) -> Itinerary:
        return self.apply(lambda doc: editor.update_tip(doc, tip_index, value))

    def reorder_days(self, from_index: int, to_index: int) -> Itinerary:
        return self.apply(lambda doc: editor.reorder_days(doc, from_index, to_index))

    # --- Save / cancel / close ---

    async def save(self) -> SaveOutcome:
        """
        Write the working copy now and report the result.

        A pending auto-save is superseded. On success the working copy
        becomes the pristine document and editing mode ends; on failure
        the session stays in editing mode with the working copy intact.
        Detached sessions save locally and always succeed.
        """
        self._saver.cancel()

        if self.is_attached:
            try:
                await self._write(self._document)
            except BaseAppError as e:
                logger.warning(f"Explicit save of itinerary {self._itinerary_id} failed: {e}")
                return SaveOutcome(success=False, error=e.detail or SAVE_ERROR_MESSAGE)
            except Exception:
                logger.exception(f"Unexpected failure saving itinerary {self._itinerary_id}")
                return SaveOutcome(success=False, error=SAVE_ERROR_MESSAGE)

        self._original = self._document
        self._editing = False
        return SaveOutcome(success=True)

    def cancel(self) -> None:
        """Drop unsaved edits and leave editing mode."""
        self._saver.cancel()
        self._document = self._original
        self._editing = False

    async def close(self) -> None:
        """Flush a pending auto-save; call when the session is torn down."""
        if await self._saver.flush():
            logger.debug(f"Pending auto-save of itinerary {self._itinerary_id} flushed on close")
