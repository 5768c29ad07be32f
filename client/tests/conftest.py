"""
Pytest fixtures for ShopMaster console tests.

Provides an in-memory fake of the POS API (served through
httpx.MockTransport), the Flask app wired to it, logged-in test clients,
and a fast credential verifier.
"""

import asyncio
import json
import uuid
from datetime import datetime, timezone

import httpx
import pytest

from shopmaster import create_app
from shopmaster.models import EntityKind
from shopmaster.services.auth_service import StaticCredentialVerifier
from shopmaster.services.entity_service import EntityService
from shopmaster.time_utils import to_utc_z


API_BASE_URL = "http://pos.test/api"
TEST_HASH_ROUNDS = 4


def utcnow() -> datetime:
    """Timestamp the fake API stamps on records."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# =============================================================================
# FAKE POS API
# =============================================================================

class FakePosApi:
    """
    In-memory POS API for customers and suppliers.

    Mirrors the real API's envelope ({success, data, message}), its routes,
    and its newest-first ordering. Switches:
    - offline: every request fails with a connection error
    - fail_status: every request answers this HTTP status with success=false
    - garbage: every request answers 200 with a non-JSON body
    - explode: every request raises a non-transport error (a client bug)
    """

    def __init__(self, base_path: str = "/api"):
        self.base_path = base_path
        self.records = {"customers": [], "suppliers": []}
        self.requests: list[httpx.Request] = []
        self.offline = False
        self.fail_status: int | None = None
        self.garbage = False
        self.explode = False

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def add(self, kind: str = "customers", **fields) -> dict:
        record = {
            "_id": uuid.uuid4().hex[:24],
            "name": fields.get("name", "Walk-in Customer"),
            "phone": fields.get("phone", "0300 1234567"),
            "address": fields.get("address", "12 Market Road"),
            "status": fields.get("status", "active"),
            "createdAt": to_utc_z(utcnow()),
            "updatedAt": to_utc_z(utcnow()),
        }
        if fields.get("email"):
            record["email"] = fields["email"].lower()
        self.records[kind].insert(0, record)
        return record

    def find(self, kind: str, record_id: str) -> dict | None:
        return next((r for r in self.records[kind] if r["_id"] == record_id), None)

    def count(self, method: str, path_suffix: str = "") -> int:
        """Number of requests with method whose path ends with path_suffix."""
        return sum(
            1 for r in self.requests
            if r.method == method and r.url.path.endswith(path_suffix)
        )

    # -- request handling --

    @staticmethod
    def _reply(status: int, success: bool, message: str, data=None) -> httpx.Response:
        body = {"success": success, "message": message}
        if data is not None:
            body["data"] = data
        return httpx.Response(status, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.offline:
            raise httpx.ConnectError("Connection refused", request=request)
        if self.explode:
            raise RuntimeError("unexpected failure")
        if self.garbage:
            return httpx.Response(200, text="<html>Bad gateway</html>")
        if self.fail_status is not None:
            return self._reply(self.fail_status, False, "Internal server error")

        path = request.url.path[len(self.base_path):]
        parts = [p for p in path.split("/") if p]
        if not parts or parts[0] not in self.records:
            return self._reply(404, False, "Route not found")

        kind, rest = parts[0], parts[1:]
        label = "Customer" if kind == "customers" else "Supplier"
        body = json.loads(request.content) if request.content else {}

        if request.method == "GET" and not rest:
            return self._reply(200, True, f"{label}s retrieved successfully", self.records[kind])

        if request.method == "GET" and rest == ["active"]:
            active = [r for r in self.records[kind] if r["status"] == "active"]
            return self._reply(200, True, f"Active {label.lower()}s retrieved successfully", active)

        if request.method == "GET" and rest == ["statistics"]:
            total = len(self.records[kind])
            return self._reply(200, True, f"{label} statistics retrieved successfully", {
                f"total{label}s": total,
                f"new{label}sToday": total,
                f"new{label}sThisWeek": total,
            })

        if request.method == "GET" and rest == ["search", "query"]:
            query = request.url.params.get("query", "").lower()
            if not query:
                return self._reply(400, False, "Search query is required")
            matches = [
                r for r in self.records[kind]
                if query in r["name"].lower()
                or query in r.get("email", "").lower()
                or query in r["phone"].lower()
            ]
            return self._reply(200, True, "Search completed successfully", matches)

        if request.method == "POST" and rest == ["add"]:
            if not all(body.get(k) for k in ("name", "phone", "address")):
                return self._reply(400, False, "Name, phone, and address are required fields")
            email = (body.get("email") or "").lower()
            if email and any(r.get("email") == email for r in self.records[kind]):
                return self._reply(409, False, f"{label} with this email already exists")
            record = self.add(kind, **body)
            return self._reply(201, True, f"{label} created successfully", record)

        if len(rest) == 1:
            record = self.find(kind, rest[0])
            if record is None:
                return self._reply(404, False, f"{label} not found")
            if request.method == "GET":
                return self._reply(200, True, f"{label} retrieved successfully", record)
            if request.method == "PUT":
                for key in ("name", "phone", "address", "email"):
                    if body.get(key) is not None:
                        record[key] = body[key]
                record["updatedAt"] = to_utc_z(utcnow())
                return self._reply(200, True, f"{label} updated successfully", record)

        if request.method == "PATCH" and len(rest) == 2 and rest[1] == "toggle-status":
            record = self.find(kind, rest[0])
            if record is None:
                return self._reply(404, False, f"{label} not found")
            record["status"] = "inactive" if record["status"] == "active" else "active"
            return self._reply(200, True, f"{label} status changed to {record['status']}", record)

        return self._reply(404, False, "Route not found")


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def verifier():
    """Default credential table hashed at the lowest bcrypt cost."""
    return StaticCredentialVerifier(rounds=TEST_HASH_ROUNDS)


@pytest.fixture(scope="function")
def fake_api():
    return FakePosApi()


@pytest.fixture(scope="function")
def make_service(fake_api):
    """Factory for EntityService instances talking to the fake API."""
    def factory(kind: EntityKind = EntityKind.CUSTOMER) -> EntityService:
        return EntityService(kind, API_BASE_URL, transport=fake_api.transport)
    return factory


@pytest.fixture(scope="function")
def app(fake_api):
    """Create application for testing."""
    app = create_app()
    app.config.update({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "API_BASE_URL": API_BASE_URL,
        "ENTITY_TRANSPORT": fake_api.transport,
        "CREDENTIAL_HASH_ROUNDS": TEST_HASH_ROUNDS,
        "SEARCH_DEBOUNCE_SECONDS": 0.01,
    })
    return app


@pytest.fixture(scope="function")
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope="function")
def admin_client(client):
    """Test client logged in as the shop admin."""
    response = login(client, "admin", "admin123")
    assert response.status_code == 200
    return client


@pytest.fixture(scope="function")
def cashier_client(client):
    """Test client logged in as a cashier."""
    response = login(client, "cashier1", "cash123")
    assert response.status_code == 200
    return client


def login(client, username: str, password: str):
    """Helper to post the login form."""
    return client.post("/api/auth/login", json={
        "username": username,
        "password": password,
    })


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)
