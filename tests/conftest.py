"""
Pytest configuration and fixtures.
"""
import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from client.notifier import Notifier
from client.storage import MemoryStorage
from client.store import ReconciliationStore
from main import app
from services.broadcaster import BroadcastPublisher, get_publisher
from services.worldpay_client import WorldpayClient, get_worldpay_client


def make_response(status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> MagicMock:
    """Stand-in for a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = payload
    response.text = text if text is not None else json.dumps(payload)
    return response


@pytest.fixture
def worldpay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORLDPAY_API_KEY", "test-api-key")
    monkeypatch.setenv("WORLDPAY_MID", "mid-123")
    monkeypatch.setenv("WORLDPAY_BASE_URL", "https://worldpay.test/text-to-pay")


@pytest.fixture
def no_worldpay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WORLDPAY_API_KEY", raising=False)
    monkeypatch.delenv("WORLDPAY_MID", raising=False)


@pytest.fixture
def provider_session() -> MagicMock:
    """requests.Session replacement; tests set request.return_value."""
    session = MagicMock()
    session.request.return_value = make_response(200, {"id": "cus_1"})
    return session


@pytest.fixture
def worldpay(provider_session: MagicMock) -> WorldpayClient:
    return WorldpayClient(session=provider_session)


@pytest.fixture
def publisher() -> MagicMock:
    publisher = MagicMock(spec=BroadcastPublisher)
    publisher.publish.return_value = True
    return publisher


@pytest.fixture
def client(worldpay: WorldpayClient, publisher: MagicMock) -> TestClient:
    """Test HTTP client with the provider and pub/sub replaced."""
    app.dependency_overrides[get_worldpay_client] = lambda: worldpay
    app.dependency_overrides[get_publisher] = lambda: publisher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def store(storage: MemoryStorage, notifier: Notifier) -> ReconciliationStore:
    return ReconciliationStore(storage, notifier).load()
