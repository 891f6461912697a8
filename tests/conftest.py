# Test configuration
import json
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from llm_jobs.config import get_settings  # noqa: E402
from llm_jobs.transport import ResponsesTransport  # noqa: E402

BASE_URL = "https://api.test/v1"
API_KEY = "test-key"


def wire_response(
    status_code: int,
    body: bytes | dict[str, Any],
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build an unread response so the client can stream its raw bytes."""
    if isinstance(body, dict):
        body = json.dumps(body).encode()
    return httpx.Response(status_code, headers=headers, stream=httpx.ByteStream(body))


def make_envelope(
    status: str = "completed",
    job_id: str = "resp_123",
    texts: list[str] | None = None,
    model: str = "gpt-5-mini-2025-08-07",
    usage: dict[str, Any] | None = None,
    error: Any = None,
) -> dict[str, Any]:
    """Build a Responses API envelope."""
    output = []
    if texts:
        output.append({
            "id": "msg_1",
            "type": "message",
            "role": "assistant",
            "content": [{"type": "output_text", "text": t} for t in texts],
        })
    envelope: dict[str, Any] = {
        "id": job_id,
        "object": "response",
        "status": status,
        "model": model,
        "output": output,
        "temperature": 1.0,
        "reasoning": {"effort": "low"},
    }
    if usage is not None:
        envelope["usage"] = usage
    if error is not None:
        envelope["error"] = error
    return envelope


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is awaited."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeResponsesAPI:
    """In-memory /responses endpoint served through httpx.MockTransport.

    POST returns ``submit_envelope``; each GET pops the next entry of
    ``poll_envelopes`` (an envelope dict or a ready ``httpx.Response``).
    """

    def __init__(self):
        self.submit_envelope: dict[str, Any] = make_envelope()
        self.poll_envelopes: list[dict[str, Any] | httpx.Response] = []
        self.requests: list[httpx.Request] = []
        self.clients: list[httpx.AsyncClient] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            return wire_response(200, self.submit_envelope)
        if not self.poll_envelopes:
            return wire_response(404, {"error": {"message": "no more polls scripted"}})
        item = self.poll_envelopes.pop(0)
        if isinstance(item, httpx.Response):
            return item
        return wire_response(200, item)

    @property
    def get_count(self) -> int:
        return sum(1 for r in self.requests if r.method == "GET")

    @property
    def post_count(self) -> int:
        return sum(1 for r in self.requests if r.method == "POST")

    def last_post_body(self) -> dict[str, Any]:
        posts = [r for r in self.requests if r.method == "POST"]
        return json.loads(posts[-1].content)

    def transport(self) -> ResponsesTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        self.clients.append(client)
        return ResponsesTransport(client=client, api_key=API_KEY, base_url=BASE_URL)


@pytest.fixture(name="wire_response")
def wire_response_fixture():
    return wire_response


@pytest.fixture
def envelope():
    return make_envelope


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def fake_api():
    api = FakeResponsesAPI()
    yield api
    for client in api.clients:
        await client.aclose()


@pytest_asyncio.fixture
async def mock_transport_factory():
    """Build a ResponsesTransport whose HTTP traffic goes to ``handler``."""
    clients: list[httpx.AsyncClient] = []

    def factory(handler) -> ResponsesTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return ResponsesTransport(client=client, api_key=API_KEY, base_url=BASE_URL)

    yield factory
    for client in clients:
        await client.aclose()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
