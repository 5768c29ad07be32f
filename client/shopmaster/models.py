# Overview: Client-side record types for the customer and supplier rosters.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .time_utils import parse_api_timestamp, to_utc_z


STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
VALID_STATUSES = {STATUS_ACTIVE, STATUS_INACTIVE}

# Fields a person can type into the add/edit forms
DRAFT_FIELDS = ("name", "phone", "email", "address")


class EntityKind(Enum):
    """
    The two roster kinds the console manages.

    The value is the URL segment on the POS API; label is the wording used
    in messages ("Customer added successfully").
    """
    CUSTOMER = "customers"
    SUPPLIER = "suppliers"

    @property
    def label(self) -> str:
        return "Customer" if self is EntityKind.CUSTOMER else "Supplier"

    @property
    def plural(self) -> str:
        return self.value


@dataclass(frozen=True)
class EntityRecord:
    """
    Cached copy of a customer or supplier owned by the POS API.

    WHY frozen: the client never edits a record in place. Every change goes
    through the API and the roster is refetched, so a stale copy can only
    be replaced, not drift.
    """
    id: str
    name: str
    phone: str
    address: str
    email: str | None = None
    status: str = STATUS_ACTIVE
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    @classmethod
    def from_dict(cls, data: dict) -> "EntityRecord":
        """
        Build a record from an API payload.

        Accepts the API's "_id"/"createdAt" keys as well as "id"/"created_at".
        Raises ValueError when the payload is not a usable record.
        """
        if not isinstance(data, dict):
            raise ValueError("Record payload must be an object")

        record_id = data.get("_id", data.get("id"))
        if record_id is None or str(record_id) == "":
            raise ValueError("Record payload is missing its id")

        status = data.get("status") or STATUS_ACTIVE
        if not isinstance(status, str) or status not in VALID_STATUSES:
            raise ValueError(f"Unknown record status: {status!r}")

        for key in DRAFT_FIELDS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Record field {key} must be a string, got {value!r}")

        created_raw = data.get("createdAt", data.get("created_at"))
        created_at = parse_api_timestamp(created_raw)

        return cls(
            id=str(record_id),
            name=data.get("name") or "",
            phone=data.get("phone") or "",
            address=data.get("address") or "",
            email=data.get("email") or None,
            status=status,
            created_at=created_at,
        )

    def field_values(self) -> dict:
        """Draft-field view of the record; missing values become empty strings."""
        return {
            "name": self.name or "",
            "phone": self.phone or "",
            "email": self.email or "",
            "address": self.address or "",
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "status": self.status,
            "created_at": to_utc_z(self.created_at),
        }
