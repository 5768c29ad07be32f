# Overview: Console session lifecycle; login/logout, permission checks, and persisted restore.

"""
Console Session Management

WHY: Every view and action in the console is gated by who is logged in.
The session is a single explicit object (SessionManager) handed to
whatever needs it, never ambient global state.

LIFECYCLE:
- Two states only: unauthenticated and authenticated
- unauthenticated -> authenticated: successful login() or restore()
- authenticated -> unauthenticated: logout()
- No automatic expiry; a session lasts until logout

PERSISTENCE:
- The logged-in user is stored as JSON under a fixed key
  (SESSION_STORAGE_KEY) in a SessionStorage, so it survives reloads
- Storage is written only by login() and logout(), read only by restore()
- Concurrent writers are not coordinated (last write wins)
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from flask import session as flask_session

from ..permissions import ROLE_ADMIN, ROLE_CASHIER, ROLE_USER
from .auth_service import CredentialVerifier


logger = logging.getLogger(__name__)

SESSION_STORAGE_KEY = "posUser"


class AuthError(Exception):
    """Base class for login failures shown inline on the login form."""
    message = "Login failed. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class MissingFieldsError(AuthError):
    """Raised when username or password is empty; the verifier is not consulted."""
    message = "Please fill in all fields"


class InvalidCredentialsError(AuthError):
    """
    Raised when no credential matches.

    SECURITY: Same message for unknown user and wrong password.
    """
    message = "Invalid username or password"


class SessionRequiredError(RuntimeError):
    """Raised when session-dependent code runs with nobody logged in."""


@dataclass(frozen=True)
class SessionUser:
    """The logged-in user as persisted: everything but the password."""
    username: str
    role: str
    name: str
    permissions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "role": self.role,
            "name": self.name,
            "permissions": list(self.permissions),
        }

    @classmethod
    def from_dict(cls, data) -> "SessionUser":
        """
        Rebuild a user from its persisted form.

        Raises ValueError if the payload is not a well-formed user.
        """
        if not isinstance(data, dict):
            raise ValueError("Session payload must be an object")

        username = data.get("username")
        role = data.get("role")
        name = data.get("name")
        permissions = data.get("permissions", [])

        for key, value in (("username", username), ("role", role)):
            if not isinstance(value, str) or not value:
                raise ValueError(f"Session payload has no valid {key}")
        if not isinstance(name, str):
            raise ValueError("Session payload has no valid name")
        if not isinstance(permissions, list) or not all(isinstance(p, str) for p in permissions):
            raise ValueError("Session payload has invalid permissions")

        return cls(username=username, role=role, name=name, permissions=tuple(permissions))


@dataclass(frozen=True)
class Session:
    """
    Snapshot of the console session.

    is_authenticated is derived from user, so the two can never disagree.
    """
    user: SessionUser | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


# =============================================================================
# STORAGE
# =============================================================================

class SessionStorage:
    """Durable key/value store for the persisted session blob."""

    def read(self, key: str) -> str | None:
        raise NotImplementedError

    def write(self, key: str, blob: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemorySessionStorage(SessionStorage):
    """Process-local storage; survives SessionManager instances, not restarts."""

    def __init__(self):
        self._items: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self._items.get(key)

    def write(self, key: str, blob: str) -> None:
        self._items[key] = blob

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class FileSessionStorage(SessionStorage):
    """
    Storage backed by a JSON document on disk.

    WHY atomic replace: a crash mid-write must leave either the old or the
    new document, never a truncated one that restore() would have to
    discard.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _dump(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def read(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, blob: str) -> None:
        try:
            data = self._load()
        except ValueError:
            logger.warning("Replacing unreadable session file %s", self.path)
            data = {}
        data[key] = blob
        self._dump(data)

    def remove(self, key: str) -> None:
        try:
            data = self._load()
        except ValueError:
            logger.warning("Discarding unreadable session file %s", self.path)
            self.path.unlink(missing_ok=True)
            return
        if key in data:
            del data[key]
            self._dump(data)


class FlaskSessionStorage(SessionStorage):
    """
    Storage in the signed Flask session cookie.

    This is the browser-side durable store for the web console: the cookie
    travels with every request, so each request can restore() the user.
    Must be used inside a request context.
    """

    def read(self, key: str) -> str | None:
        value = flask_session.get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, blob: str) -> None:
        flask_session[key] = blob

    def remove(self, key: str) -> None:
        flask_session.pop(key, None)


# =============================================================================
# SESSION MANAGER
# =============================================================================

@dataclass
class SessionManager:
    """
    Owns the current console session.

    Constructed once per client (per request in the web console) with the
    credential verifier and the storage it persists to.
    """
    verifier: CredentialVerifier
    storage: SessionStorage = field(default_factory=MemorySessionStorage)
    storage_key: str = SESSION_STORAGE_KEY
    _session: Session = field(default_factory=Session, init=False, repr=False)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def user(self) -> SessionUser | None:
        return self._session.user

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def require_user(self) -> SessionUser:
        """
        Return the logged-in user.

        Raises SessionRequiredError when nobody is logged in; callers only
        reach session-dependent code after checking is_authenticated, so
        this is a programming error, not a user-facing one.
        """
        if self._session.user is None:
            raise SessionRequiredError("No authenticated console session")
        return self._session.user

    def restore(self) -> Session:
        """
        Load the persisted session, if any.

        Never raises: unreadable storage and malformed blobs are logged and
        treated as "no session".
        """
        try:
            blob = self.storage.read(self.storage_key)
        except (OSError, ValueError):
            logger.warning("Could not read persisted session", exc_info=True)
            blob = None

        if not blob:
            self._session = Session()
            return self._session

        try:
            user = SessionUser.from_dict(json.loads(blob))
        except ValueError:
            logger.warning("Ignoring malformed persisted session under '%s'", self.storage_key)
            self._session = Session()
            return self._session

        self._session = Session(user=user)
        return self._session

    def login(self, username: str, password: str) -> Session:
        """
        Authenticate against the credential verifier and persist the session.

        Raises:
            MissingFieldsError: username or password empty (verifier not consulted)
            InvalidCredentialsError: no matching credential; any prior
                session is left untouched
        """
        if not username or not password:
            raise MissingFieldsError()

        credential = self.verifier.verify(username, password)
        if credential is None:
            logger.info("Rejected console login for '%s'", username)
            raise InvalidCredentialsError()

        user = SessionUser(
            username=credential.username,
            role=credential.role,
            name=credential.display_name,
            permissions=tuple(credential.permissions),
        )
        self._session = Session(user=user)

        try:
            self.storage.write(self.storage_key, json.dumps(user.to_dict()))
        except OSError:
            logger.exception("Failed to persist console session for '%s'", username)

        logger.info("Console login for '%s' (%s)", user.username, user.role)
        return self._session

    def logout(self) -> None:
        """Clear the session and its persisted copy. Safe to call repeatedly."""
        if self._session.user is not None:
            logger.info("Console logout for '%s'", self._session.user.username)
        self._session = Session()

        try:
            self.storage.remove(self.storage_key)
        except OSError:
            logger.exception("Failed to remove persisted console session")

    def has_permission(self, permission: str) -> bool:
        user = self._session.user
        if user is None:
            return False
        return permission in user.permissions

    @property
    def role(self) -> str | None:
        return self._session.user.role if self._session.user else None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_cashier(self) -> bool:
        return self.role == ROLE_CASHIER

    @property
    def is_user(self) -> bool:
        return self.role == ROLE_USER
