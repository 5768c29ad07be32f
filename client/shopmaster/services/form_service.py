# Overview: Add/edit form state for customers and suppliers; validation, dirty tracking, submission.

"""
Form Editor

One editor backs all four forms (add/edit x customer/supplier).

- Create mode starts from an empty draft and has no dirty gate.
- Edit mode keeps a baseline snapshot of the record being edited and
  compares every field against it on each change; submission is allowed
  only when something differs.
- A submission in flight blocks both a second submit and close().
"""

from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable

from ..models import DRAFT_FIELDS, EntityKind, EntityRecord
from ..notifications import Notifier
from ..validation import DraftValidationPolicy, normalize_draft, validate_draft


SubmitHandler = Callable[[dict], Awaitable[bool]]


class FormMode(Enum):
    CREATE = "create"
    EDIT = "edit"


class SubmitOutcome(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"        # the service rejected the call; the form stays open
    INVALID = "invalid"      # validation errors; nothing was sent
    UNCHANGED = "unchanged"  # edit mode with no changes; nothing was sent
    BUSY = "busy"            # a submission is already in flight


def _empty_draft() -> dict:
    return {name: "" for name in DRAFT_FIELDS}


class FormEditor:
    """
    Draft state for one add/edit form.

    Args:
        kind: entity kind, used for message wording
        mode: FormMode.CREATE or FormMode.EDIT
        submit_handler: coroutine taking the normalized payload, returning
            True on success (RosterController.create / update)
        baseline: the record being edited (required in edit mode)
        notifier: where the "no changes" notice goes
    """

    def __init__(
        self,
        kind: EntityKind,
        mode: FormMode,
        submit_handler: SubmitHandler,
        *,
        baseline: EntityRecord | None = None,
        notifier: Notifier | None = None,
    ):
        if mode is FormMode.EDIT and baseline is None:
            raise ValueError("Edit mode needs the record being edited")

        self.kind = kind
        self.mode = mode
        self.submit_handler = submit_handler
        self.notifier = notifier or Notifier()
        self.policy = DraftValidationPolicy(label=kind.label)

        self.baseline: dict = baseline.field_values() if baseline is not None else _empty_draft()
        self.record_id = baseline.id if baseline is not None else None
        self.draft: dict = dict(self.baseline)
        self.errors: dict[str, str] = {}
        self.is_dirty = False
        self.submitting = False

    def load(self, record: EntityRecord) -> None:
        """Re-seed an edit form from a (possibly refreshed) record."""
        if self.mode is not FormMode.EDIT:
            raise ValueError("Only edit forms can load a record")
        self.baseline = record.field_values()
        self.record_id = record.id
        self.draft = dict(self.baseline)
        self.errors = {}
        self.is_dirty = False

    def on_field_change(self, field: str, value: str) -> None:
        """Update one field, clear its error, and recompute dirtiness in edit mode."""
        if field not in self.draft:
            raise KeyError(f"Unknown form field: {field}")

        self.draft[field] = value if value is not None else ""
        self.errors.pop(field, None)

        if self.mode is FormMode.EDIT:
            self.is_dirty = any(
                (self.draft[name] or "").strip() != (self.baseline.get(name) or "").strip()
                for name in DRAFT_FIELDS
            )

    def validate(self) -> dict[str, str]:
        self.errors = validate_draft(self.draft, self.policy)
        return dict(self.errors)

    @property
    def can_submit(self) -> bool:
        if self.submitting:
            return False
        return self.mode is FormMode.CREATE or self.is_dirty

    async def submit(self) -> SubmitOutcome:
        """
        Validate, then hand the normalized payload to the submit handler.

        The in-flight flag is cleared however the call ends. A successful
        submission closes the form.
        """
        if self.submitting:
            return SubmitOutcome.BUSY

        if self.validate():
            return SubmitOutcome.INVALID

        if self.mode is FormMode.EDIT and not self.is_dirty:
            self.notifier.info("No changes were made to update", title="No Changes")
            return SubmitOutcome.UNCHANGED

        payload = normalize_draft(self.draft)

        self.submitting = True
        try:
            succeeded = await self.submit_handler(payload)
        finally:
            self.submitting = False

        if not succeeded:
            return SubmitOutcome.FAILED

        self.close()
        return SubmitOutcome.SUCCEEDED

    def close(self) -> bool:
        """
        Reset the draft (empty for add, the baseline for edit) and clear errors.

        Refused while a submission is in flight; returns False then.
        """
        if self.submitting:
            return False
        self.draft = dict(self.baseline) if self.mode is FormMode.EDIT else _empty_draft()
        self.errors = {}
        self.is_dirty = False
        return True
