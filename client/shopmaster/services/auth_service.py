# Overview: Credential verification for console logins; hashes and checks passwords with bcrypt.

"""
Credential Verification Service

WHY: The console ships with a fixed credential table (admin and two
cashiers). Login only ever asks one question of it: "who is this
username/password pair?" Keeping that question behind CredentialVerifier
means a real identity provider can replace the table without the session
layer changing.

SECURITY NOTES:
- Seed passwords are hashed with bcrypt once, when the verifier is built
- Verification uses bcrypt.checkpw (timing-safe)
- Usernames match exactly (case-sensitive)
- The verifier never says whether the username or the password was wrong
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import bcrypt

from ..permissions import (
    ROLE_ADMIN,
    ROLE_CASHIER,
    VALID_ROLES,
    get_role_permissions,
    validate_permission_code,
)


logger = logging.getLogger(__name__)

DEFAULT_HASH_ROUNDS = 12


# (username, password, role, display name)
DEFAULT_CREDENTIALS = [
    ("admin", "admin123", ROLE_ADMIN, "Shop Admin"),
    ("cashier1", "cash123", ROLE_CASHIER, "Cashier One"),
    ("cashier2", "cash456", ROLE_CASHIER, "Cashier Two"),
]


@dataclass(frozen=True)
class Credential:
    """
    One entry of the credential table.

    permissions is a tuple so the credential stays hashable and immutable.
    """
    username: str
    password_hash: str
    role: str
    display_name: str
    permissions: tuple[str, ...]


def hash_password(password: str, rounds: int = DEFAULT_HASH_ROUNDS) -> str:
    """
    Hash password using bcrypt.

    WHY configurable rounds: production keeps the default cost of 12;
    test suites lower it so building a verifier stays fast.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    Returns True if password matches hash, False otherwise (including
    malformed hashes).
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Rejected malformed password hash")
        return False


class CredentialVerifier:
    """
    Identity lookup used by the session manager.

    Subclasses answer verify(username, password) with the matching
    Credential, or None when the pair is not known.
    """

    def verify(self, username: str, password: str) -> Credential | None:
        raise NotImplementedError


class StaticCredentialVerifier(CredentialVerifier):
    """
    Verifier over an in-process credential table.

    Args:
        entries: iterable of (username, password, role, display_name) or
            (username, password, role, display_name, permissions). Without
            explicit permissions the role's default grants are used.
        rounds: bcrypt cost used to hash the plaintext seed passwords.

    Raises:
        ValueError: on an unknown role, an unknown permission code, or a
            duplicated username.
    """

    def __init__(self, entries=None, *, rounds: int = DEFAULT_HASH_ROUNDS):
        if entries is None:
            entries = DEFAULT_CREDENTIALS

        self._credentials: dict[str, Credential] = {}
        for entry in entries:
            username, password, role, display_name, *rest = entry
            if role not in VALID_ROLES:
                raise ValueError(f"Unknown role '{role}' for user '{username}'")
            if username in self._credentials:
                raise ValueError(f"Duplicate username '{username}' in credential table")

            permissions = rest[0] if rest else get_role_permissions(role)
            unknown = [code for code in permissions if not validate_permission_code(code)]
            if unknown:
                raise ValueError(f"Unknown permission(s) for user '{username}': {', '.join(unknown)}")

            self._credentials[username] = Credential(
                username=username,
                password_hash=hash_password(password, rounds=rounds),
                role=role,
                display_name=display_name,
                permissions=tuple(permissions),
            )

        # Checked against unknown usernames so both failure paths cost one bcrypt round
        self._decoy_hash = hash_password("decoy", rounds=rounds)

        logger.info("Loaded %d console credentials", len(self._credentials))

    def __len__(self) -> int:
        return len(self._credentials)

    def verify(self, username: str, password: str) -> Credential | None:
        credential = self._credentials.get(username)
        if credential is None:
            verify_password(password, self._decoy_hash)
            return None

        if verify_password(password, credential.password_hash):
            return credential

        return None
