"""Test fixtures for history API tests."""

import httpx
import pytest
from fastapi.testclient import TestClient

from timebase_history.api.history_app import create_history_service
from timebase_history.api.history_service import HistoryService
from timebase_history.config import HistoryConfig
from timebase_history.timebase.client import TimebaseClient
from test_timebase import SAMPLE_PAYLOAD


def payload_for(tag_names):
    """Sample payload restricted to the requested tags."""
    return {
        **SAMPLE_PAYLOAD,
        "tl": [item for item in SAMPLE_PAYLOAD["tl"] if item["t"]["n"] in tag_names],
    }


@pytest.fixture
def config() -> HistoryConfig:
    return HistoryConfig(timebase={"base_url": "http://historian:4511", "timeout": 5.0})


@pytest.fixture
def timebase_requests():
    """Requests received by the fake Timebase server."""
    return []


@pytest.fixture
def timebase_client(timebase_requests) -> TimebaseClient:
    """Timebase client answering from the sample payload."""
    def handler(request: httpx.Request) -> httpx.Response:
        timebase_requests.append(request)
        return httpx.Response(200, json=payload_for(request.url.params.get_list("tagname")))

    return TimebaseClient(
        "http://historian:4511",
        timeout=5.0,
        transport=httpx.MockTransport(handler)
    )


@pytest.fixture
def history_service(config, timebase_client) -> HistoryService:
    return HistoryService(config, client=timebase_client)


@pytest.fixture
def test_client(config, timebase_client):
    """FastAPI test client with the service started."""
    app = create_history_service(config, client=timebase_client)
    with TestClient(app) as client:
        yield client
