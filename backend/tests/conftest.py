import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure backend package is importable
backend_root = Path(__file__).resolve().parents[1]
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))


def chat_body(content):
    """Raw body of a successful chat completion carrying `content`."""
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text


class FakeGroq:
    """Scripted stand-in for httpx.AsyncClient: replies are consumed in order."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def reply(self, status_code, text):
        self.replies.append(FakeResponse(status_code, text))
        return self

    def reply_content(self, content):
        return self.reply(200, chat_body(content))

    def raise_error(self, exc):
        self.replies.append(exc)
        return self

    def async_client(self, *args, **kwargs):
        fake = self

        class FakeAsyncClient:
            async def __aenter__(self):
                return self

            async def __aexit__(self, exc_type, exc, tb):
                return False

            async def post(self, url, json=None, headers=None):
                fake.calls.append({"url": url, "json": json, "headers": headers})
                if not fake.replies:
                    raise AssertionError(f"unexpected upstream call for model {json.get('model')}")
                reply = fake.replies.pop(0)
                if isinstance(reply, Exception):
                    raise reply
                return reply

        return FakeAsyncClient()

    @property
    def models(self):
        return [c["json"]["model"] for c in self.calls]


@pytest.fixture
def fake_groq(monkeypatch):
    from app import llm_client  # type: ignore

    fake = FakeGroq()
    monkeypatch.setattr(llm_client.httpx, "AsyncClient", fake.async_client)
    return fake


@pytest.fixture
def settings():
    from app.config import Settings  # type: ignore

    return Settings(groq_api_key="gsk_test_key_123456")


@pytest.fixture
def client(settings, monkeypatch):
    """Provide a FastAPI TestClient whose settings come from the `settings` fixture."""
    # Avoid accidental usage of real API keys during tests
    monkeypatch.setenv("GROQ_API_KEY", "")

    from app.config import get_settings  # type: ignore
    from app.main import app  # type: ignore

    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
