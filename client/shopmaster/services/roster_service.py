# Overview: Roster state for one entity kind; fetch, debounced filtering, and create/update/toggle flows.

"""
Roster Controller

WHY: Customers and suppliers are managed with the same pattern: fetch the
whole roster, filter it client-side as the user types, and send every
change through the POS API followed by a refetch. One controller,
instantiated per entity kind, owns that pattern.

STATE MACHINE:
    idle -> loading -> ready | error
Every refresh() re-enters loading.

INVARIANTS:
- filtered is always the subsequence of all_records whose name contains
  the query (case-insensitive); an empty query means filtered == all
- A failed refresh keeps the last good all_records/filtered
  (stale-but-available, the table is never blanked)
- At most one debounced filter pass is pending; scheduling a new one
  cancels the old timer
- Status changes come from the server; the client never flips a status
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable

from ..models import EntityRecord, STATUS_ACTIVE
from ..notifications import Notifier
from .entity_service import EntityService, ServiceResponse
from .form_service import FormEditor, FormMode


logger = logging.getLogger(__name__)

SEARCH_DEBOUNCE_SECONDS = 0.15


class RosterStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def filter_records(records: list[EntityRecord], query: str) -> list[EntityRecord]:
    """
    Case-insensitive substring match on name, preserving server order.

    A blank query (empty or whitespace) matches everything; otherwise the
    query is matched as typed, surrounding spaces included.
    """
    if not query.strip():
        return list(records)
    needle = query.lower()
    return [record for record in records if needle in record.name.lower()]


class Debouncer:
    """
    Runs callback once a quiet period has passed since the last schedule().

    Each schedule() cancels the pending timer handle before registering a
    new one, so a superseded call never fires. Must be used from inside a
    running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.callback()


class RosterController:
    """
    Owns one roster: all records, the filtered view, the query, loading
    state, the selected record, and the active form editor.

    Args:
        service: EntityService for the roster's kind
        notifier: where success/error toasts go (a fresh Notifier if omitted)
        debounce_seconds: quiet period before a typed query is applied
    """

    def __init__(
        self,
        service: EntityService,
        notifier: Notifier | None = None,
        *,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
    ):
        self.service = service
        self.kind = service.kind
        self.notifier = notifier or Notifier()

        self.all_records: list[EntityRecord] = []
        self.filtered: list[EntityRecord] = []
        self.query = ""
        self.status = RosterStatus.IDLE
        self.selected: EntityRecord | None = None
        self.editor: FormEditor | None = None

        self._debouncer = Debouncer(debounce_seconds, self._apply_pending_filter)

    @property
    def loading(self) -> bool:
        return self.status is RosterStatus.LOADING

    @property
    def filter_pending(self) -> bool:
        return self._debouncer.pending

    # -- fetching --

    async def refresh(self) -> bool:
        """
        Refetch the whole roster.

        On failure an error toast is raised and the previous records stay
        in place. Returns True on success.
        """
        self.status = RosterStatus.LOADING
        response = await self.service.list_all()

        if not response.success:
            self.status = RosterStatus.ERROR
            self.notifier.error(response.message or f"Failed to fetch {self.kind.plural}")
            return False

        self.all_records = list(response.data or [])
        self.status = RosterStatus.READY
        self.apply_filter()
        return True

    # -- filtering --

    def set_query(self, text: str) -> None:
        """
        Store the query now and filter after the debounce window.

        A blank (empty or whitespace) query skips the debounce and shows the
        whole roster immediately.
        """
        self.query = text or ""
        if not self.query.strip():
            self.apply_filter()
            return
        self._debouncer.schedule()

    def apply_filter(self) -> None:
        """Filter right away with the current query, dropping any pending pass."""
        self._debouncer.cancel()
        self.filtered = filter_records(self.all_records, self.query)

    def _apply_pending_filter(self) -> None:
        # Reads query and all_records at fire time, so the freshest of both win
        self.filtered = filter_records(self.all_records, self.query)

    def clear_query(self) -> None:
        self.set_query("")

    # -- selection --

    def select(self, record: EntityRecord) -> None:
        self.selected = record

    def clear_selection(self) -> None:
        self.selected = None

    # -- editing --

    def open_editor(self, record: EntityRecord | None = None) -> FormEditor:
        """
        Open the add form (no record) or the edit form seeded with record.

        The editor submits through create()/update() on this controller.
        """
        if record is None:
            editor = FormEditor(self.kind, FormMode.CREATE, self.create, notifier=self.notifier)
        else:
            self.select(record)

            async def submit_update(payload: dict) -> bool:
                return await self.update(record.id, payload)

            editor = FormEditor(
                self.kind, FormMode.EDIT, submit_update, baseline=record, notifier=self.notifier
            )
        self.editor = editor
        return editor

    def _dismiss_editor(self) -> None:
        editor, self.editor = self.editor, None
        # An editor mid-submit closes itself once its submission resolves
        if editor is not None and not editor.submitting:
            editor.close()

    async def create(self, draft: dict) -> bool:
        """
        Create a record from a normalized draft.

        On success: toast, refresh, close the active editor. On failure:
        toast with the server's message and keep the editor open.
        """
        response = await self.service.create(draft)
        if not self._report(response, f"{self.kind.label} added successfully"):
            return False

        await self.refresh()
        self._dismiss_editor()
        return True

    async def update(self, record_id: str, draft: dict) -> bool:
        """
        Update a record from a normalized draft.

        Not sent when the active edit form for this record reports no changes.
        """
        editor = self.editor
        if (
            editor is not None
            and editor.mode is FormMode.EDIT
            and editor.record_id == record_id
            and not editor.is_dirty
        ):
            logger.debug("Skipping update of %s %s: no changes", self.kind.label.lower(), record_id)
            return False

        response = await self.service.update(record_id, draft)
        if not self._report(response, f"{self.kind.label} updated successfully"):
            return False

        await self.refresh()
        if self.editor is not None and self.editor.record_id == record_id:
            self._dismiss_editor()
        if self.selected is not None and self.selected.id == record_id:
            self.clear_selection()
        return True

    async def toggle_status(self, record_id: str) -> bool:
        """
        Ask the server to flip active/inactive, then refetch.

        The success message uses the status the server reports; the new
        status shown in the roster comes from the refetch.
        """
        response = await self.service.toggle_status(record_id)
        if not response.success:
            self.notifier.error(response.message or f"Failed to update {self.kind.label.lower()} status")
            return False

        if response.data is None:
            message = f"{self.kind.label} status updated successfully"
        else:
            verb = "activated" if response.data == STATUS_ACTIVE else "deactivated"
            message = f"{self.kind.label} {verb} successfully"
        self.notifier.success(message)

        await self.refresh()
        return True

    def _report(self, response: ServiceResponse, success_message: str) -> bool:
        if response.success:
            self.notifier.success(success_message)
            return True
        self.notifier.error(response.message or "Something went wrong. Please try again.")
        return False
