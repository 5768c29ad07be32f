# Overview: Shared per-application resources: the credential verifier and POS API clients.

from flask import current_app

from .models import EntityKind
from .services.auth_service import StaticCredentialVerifier
from .services.entity_service import EntityService


VERIFIER_EXTENSION_KEY = "shopmaster.credential_verifier"


def get_credential_verifier():
    """
    The application's credential verifier, built on first use.

    WHY lazy: hashing the credential table costs a few bcrypt rounds, and
    building it after configuration is final lets tests lower the cost.
    An application may also install its own verifier under
    VERIFIER_EXTENSION_KEY before the first request.
    """
    verifier = current_app.extensions.get(VERIFIER_EXTENSION_KEY)
    if verifier is None:
        verifier = StaticCredentialVerifier(rounds=current_app.config["CREDENTIAL_HASH_ROUNDS"])
        current_app.extensions[VERIFIER_EXTENSION_KEY] = verifier
    return verifier


def entity_service(kind: EntityKind) -> EntityService:
    """A POS API client for kind; use it as an async context manager."""
    return EntityService(
        kind,
        current_app.config["API_BASE_URL"],
        transport=current_app.config.get("ENTITY_TRANSPORT"),
    )
