# Overview: Application configuration read from the environment with local defaults.

from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key (signs the session cookie)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Remote POS API serving customers and suppliers
    API_BASE_URL = os.environ.get(
        "SHOPMASTER_API_URL",  # optional alternative location
        "http://localhost:5000/api",  # default local location
    )

    # Key the logged-in user is persisted under in client storage
    SESSION_STORAGE_KEY = "posUser"

    # Quiet period before a roster search is applied
    SEARCH_DEBOUNCE_SECONDS = 0.15

    # bcrypt cost for the built-in credential table
    CREDENTIAL_HASH_ROUNDS = int(os.environ.get("CREDENTIAL_HASH_ROUNDS", "12"))

    # Optional httpx transport for the Entity Service (tests swap in a fake API)
    ENTITY_TRANSPORT = None
