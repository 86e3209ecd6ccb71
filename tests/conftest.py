import json
import os
import sys
from datetime import datetime, timedelta

import httpx
import pytest

# Ensure project root is on sys.path so tests can import `main` and `hnreader`
PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from hnreader.datasource.hackernews import CategoryService, ItemRepository  # noqa: E402
from hnreader.services import ServiceClient, TTLCache  # noqa: E402

BASE_URL = "https://hn.test/v0"


class FakeClock:
    """Stands in for datetime.now in TTLCache."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeSleep:
    """Records backoff delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeBackend:
    """
    Canned responses keyed by API path (e.g. "/item/1.json").

    Each response is a JSON value, an httpx.Response or an exception to
    raise. A route with several responses serves them in order and then
    repeats the last one. Unknown paths answer 404.
    """

    def __init__(self):
        self.routes: dict[str, list] = {}
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []

    def add(self, path: str, *responses) -> None:
        self.routes[path] = list(responses)

    def add_item(self, item_id: int, payload) -> None:
        self.add(f"/item/{item_id}.json", payload)

    def calls_to(self, path: str) -> int:
        return self.calls.count(path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v0")
        self.calls.append(path)
        self.requests.append(request)

        queue = self.routes.get(path)
        if not queue:
            return httpx.Response(404)

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            # Fresh copy, a route may serve the same canned response repeatedly
            return httpx.Response(
                response.status_code,
                content=response.content,
                headers=response.headers,
            )
        return httpx.Response(
            200,
            content=json.dumps(response).encode(),
            headers={"Content-Type": "application/json"},
        )


def story_payload(item_id: int, **overrides) -> dict:
    payload = {
        "id": item_id,
        "type": "story",
        "by": "pg",
        "time": 1_700_000_000 + item_id,
        "title": f"Story {item_id}",
        "score": 100,
        "url": f"https://www.example.com/{item_id}",
        "descendants": 0,
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


def comment_payload(item_id: int, parent: int = 1, **overrides) -> dict:
    payload = {
        "id": item_id,
        "type": "comment",
        "by": "norvig",
        "time": 1_700_000_100 + item_id,
        "parent": parent,
        "text": "Nice write-up.",
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper():
    return FakeSleep()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def client(backend, cache, sleeper):
    http = httpx.AsyncClient(transport=httpx.MockTransport(backend.handler))
    return ServiceClient(cache=cache, http_client=http, sleep=sleeper)


@pytest.fixture
def items(client):
    return ItemRepository(client, base_url=BASE_URL)


@pytest.fixture
def service(client):
    return CategoryService(client, base_url=BASE_URL)
