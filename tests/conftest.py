import os

# Pas de Redis pendant les tests: le lifespan désactive le rate limiting
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import httpx
import pytest
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple, Union
from fastapi.testclient import TestClient

from sio_capture.app_setup.factory import create_app
from sio_capture.config import Settings
from sio_capture.dependencies import get_http_client

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeRemote:
    """
    Faux PayPal + systeme.io branché sur httpx.MockTransport.
    - on(method, path, *replies): réponses servies dans l'ordre (la dernière est rejouée)
    - calls: toutes les requêtes reçues, dans l'ordre
    """

    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], List[Reply]] = {}

    def on(self, method: str, path: str, *replies: Reply) -> "FakeRemote":
        self._routes[(method.upper(), path)] = list(replies)
        return self

    def json(self, method: str, path: str, status: int = 200, body: Optional[Any] = None) -> "FakeRemote":
        return self.on(method, path, httpx.Response(status, json=body if body is not None else {}))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        replies = self._routes.get((request.method, request.url.path))
        if not replies:
            return httpx.Response(404, json={"error": "unrouted", "path": request.url.path})
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        return reply(request) if callable(reply) else reply

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def calls_to(self, method: str, path: str) -> List[httpx.Request]:
        return [c for c in self.calls if c.method == method.upper() and c.url.path == path]

    def paths(self) -> List[str]:
        return [f"{c.method} {c.url.path}" for c in self.calls]


# Chemins distants (bases: sandbox PayPal et https://api.systeme.io/api)
TOKEN_PATH = "/v1/oauth2/token"
ORDERS_PATH = "/v2/checkout/orders"
CONTACTS_PATH = "/api/contacts"


def capture_path(order_id: str) -> str:
    return f"{ORDERS_PATH}/{order_id}/capture"


def enroll_path(course_id: str) -> str:
    return f"/api/school/courses/{course_id}/enrollments"


def paypal_capture_details(amount: str = "19.00", status: str = "COMPLETED", top_status: Optional[str] = None) -> Dict[str, Any]:
    details: Dict[str, Any] = {
        "id": "O1",
        "payer": {
            "email_address": "buyer@example.com",
            "name": {"given_name": "Ada", "surname": "Lovelace"},
            "address": {"country_code": "FR"},
        },
        "purchase_units": [
            {
                "reference_id": "STARTER-ONLY",
                "shipping": {
                    "address": {
                        "address_line_1": "12 rue de la Paix",
                        "address_line_2": "Bât. B",
                        "admin_area_2": "Paris",
                        "admin_area_1": "IDF",
                        "postal_code": "75002",
                        "country_code": "FR",
                    }
                },
                "payments": {"captures": [{"id": "CAP1", "status": status, "amount": {"currency_code": "EUR", "value": amount}}]},
            }
        ],
    }
    if top_status is not None:
        details["status"] = top_status
    return details


@pytest.fixture
def settings() -> Settings:
    return Settings(
        paypal_env="sandbox",
        paypal_client_id="client-id",
        paypal_client_secret="client-secret",
        sio_api_key="sio-key",
        sio_course_id_starter="C-STARTER",
        sio_course_id_mini="C-MINI",
        sio_base_url="https://api.systeme.io/api",
    )


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def paypal_ok(remote: FakeRemote) -> FakeRemote:
    """Token PayPal accepté."""
    return remote.json("POST", TOKEN_PATH, 200, {"access_token": "A21AA-token", "token_type": "Bearer"})


@pytest.fixture
def app(settings: Settings, remote: FakeRemote):
    application = create_app(settings)

    async def _fake_http_client():
        async with remote.client() as c:
            yield c

    application.dependency_overrides[get_http_client] = _fake_http_client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
