from __future__ import annotations

import re
from dataclasses import dataclass, field

from .models import DRAFT_FIELDS


PHONE_PATTERN = re.compile(r"^[\d\s\-\+\(\)]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class DraftValidationPolicy:
    """
    Central policy layer for the add/edit forms:
    - required: fields that must be non-blank after trimming
    - min_lengths: minimum trimmed length per field
    - patterns: (regex, message) a non-blank value must match
    - label: entity wording for the name message ("Customer name is required")
    """
    label: str = "Customer"
    required: frozenset[str] = frozenset({"name", "phone", "address"})
    min_lengths: dict[str, int] = field(default_factory=lambda: {"name": 2, "address": 5})
    patterns: dict[str, tuple[re.Pattern, str]] = field(default_factory=lambda: {
        "phone": (PHONE_PATTERN, "Please enter a valid phone number"),
        "email": (EMAIL_PATTERN, "Please enter a valid email address"),
    })

    def required_message(self, name: str) -> str:
        if name == "name":
            return f"{self.label} name is required"
        if name == "phone":
            return "Phone number is required"
        return f"{name.capitalize()} is required"

    def min_length_message(self, name: str, length: int) -> str:
        return f"{name.capitalize()} must be at least {length} characters"


def _check_field(name: str, value: str, policy: DraftValidationPolicy) -> str | None:
    value = (value or "").strip()

    if not value:
        if name in policy.required:
            return policy.required_message(name)
        # Optional and blank: nothing else to check
        return None

    min_length = policy.min_lengths.get(name)
    if min_length and len(value) < min_length:
        return policy.min_length_message(name, min_length)

    rule = policy.patterns.get(name)
    if rule is not None:
        pattern, message = rule
        if not pattern.match(value):
            return message

    return None


def validate_draft(draft: dict, policy: DraftValidationPolicy) -> dict[str, str]:
    """
    Run every field rule independently.

    Returns {field: message} for each invalid field; empty when the draft is
    valid. Rules never short-circuit across fields, so one call reports every
    problem at once.
    """
    errors: dict[str, str] = {}
    for name in DRAFT_FIELDS:
        message = _check_field(name, draft.get(name, ""), policy)
        if message:
            errors[name] = message
    return errors


def normalize_draft(draft: dict) -> dict:
    """
    Submission payload: every field trimmed, email omitted when blank.
    """
    payload = {name: (draft.get(name) or "").strip() for name in DRAFT_FIELDS}
    if not payload["email"]:
        del payload["email"]
    return payload
