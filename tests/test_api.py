"""Integration tests for the HTTP API."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from cloudpipe.main import create_app

from .conftest import CHAT_URL, completion_body

IMAGE_URL = "https://images.test/openai/images/generations"


def make_config(**overrides):
    config = {
        "chat_url": CHAT_URL,
        "api_key": "test-key",
        "image_url": IMAGE_URL,
        "request_timeout": 5.0,
        "chat_temperature": 0.0,
        "weather_latency": 0.0,
        "log_level": "INFO",
        "port": 8003,
        "cors_origins": ["http://localhost:3000"],
    }
    config.update(overrides)
    return config


class FakeAzure:
    """Routes chat and image requests to scripted replies"""

    def __init__(self, chat_replies=(), image_reply=None):
        self.chat_replies = list(chat_replies)
        self.image_reply = image_reply
        self.chat_requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == IMAGE_URL:
            return self.image_reply
        self.chat_requests.append(json.loads(request.content))
        reply = self.chat_replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)


@pytest.fixture
def api():
    def _api(fake, **overrides):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake))
        return TestClient(create_app(make_config(**overrides), http_client))
    return _api


class TestChatEndpoint:
    """Tests for POST /chat."""

    def test_function_calling_round_trip(self, api):
        fake = FakeAzure(chat_replies=[
            completion_body(None, {"name": "GetWeather", "arguments": "{\"city\":\"Paris\"}"}),
            completion_body("It's sunny and 34°C in Paris."),
        ])

        with api(fake) as client:
            response = client.post("/chat", json={"message": "What's the weather in Paris?", "session_id": "s1"})

        assert response.status_code == 200
        data = response.json()
        assert data["response"] == "It's sunny and 34°C in Paris."
        assert data["function_called"] == "GetWeather"
        assert data["rounds"] == 2
        assert data["session_id"] == "s1"
        assert len(fake.chat_requests) == 2

    def test_plain_answer(self, api):
        fake = FakeAzure(chat_replies=[completion_body("Hello!")])

        with api(fake) as client:
            response = client.post("/chat", json={"message": "Hi"})

        assert response.status_code == 200
        assert response.json()["function_called"] is None
        assert response.json()["rounds"] == 1

    def test_upstream_error_is_bad_gateway(self, api):
        fake = FakeAzure(chat_replies=[httpx.Response(500, text="boom")])

        with api(fake) as client:
            response = client.post("/chat", json={"message": "Hi"})

        assert response.status_code == 502
        assert "round 1" in response.json()["detail"]

    def test_upstream_timeout_is_gateway_timeout(self, api):
        fake = FakeAzure(chat_replies=[
            completion_body(None, {"name": "GetWeather", "arguments": "{\"city\":\"Paris\"}"}),
            httpx.ReadTimeout("timed out"),
        ])

        with api(fake) as client:
            response = client.post("/chat", json={"message": "Weather in Paris?"})

        assert response.status_code == 504
        assert "round 2" in response.json()["detail"]

    def test_trace_id_is_echoed(self, api):
        fake = FakeAzure(chat_replies=[completion_body("Hello!")])

        with api(fake) as client:
            response = client.post("/chat", json={"message": "Hi"}, headers={"X-Trace-ID": "trace-123"})

        assert response.headers["X-Trace-ID"] == "trace-123"


class TestCompletionEndpoints:
    """Tests for the single-shot and multi-turn endpoints."""

    def test_single(self, api):
        fake = FakeAzure(chat_replies=[completion_body(" Bonjour ")])

        with api(fake) as client:
            response = client.post("/chat/single", json={"message": "Hello in French", "temperature": 0.5})

        assert response.json() == {"response": "Bonjour"}
        assert fake.chat_requests[0]["temperature"] == 0.5

    def test_multi(self, api):
        fake = FakeAzure(chat_replies=[completion_body("Four.")])

        with api(fake) as client:
            response = client.post("/chat/multi", json={"messages": [
                {"role": "system", "content": "Be brief."},
                {"role": "user", "content": "2 + 2?"},
            ]})

        assert response.json() == {"response": "Four."}
        assert [m["role"] for m in fake.chat_requests[0]["messages"]] == ["system", "user"]

    def test_multi_requires_messages(self, api):
        with api(FakeAzure()) as client:
            response = client.post("/chat/multi", json={"messages": []})

        assert response.status_code == 422

    def test_single_fails_soft(self, api):
        fake = FakeAzure(chat_replies=[httpx.Response(500, text="boom")])

        with api(fake) as client:
            response = client.post("/chat/single", json={"message": "Hi"})

        assert response.status_code == 200
        assert response.json() == {"response": ""}


class TestImageEndpoint:
    """Tests for POST /images."""

    def test_generate_image(self, api):
        fake = FakeAzure(image_reply=httpx.Response(200, json={"data": [{"url": "https://cdn.test/cat.png"}]}))

        with api(fake) as client:
            response = client.post("/images", json={"prompt": "a cat"})

        assert response.json() == {"url": "https://cdn.test/cat.png"}

    def test_image_failure_is_bad_gateway(self, api):
        fake = FakeAzure(image_reply=httpx.Response(400, text="content filtered"))

        with api(fake) as client:
            response = client.post("/images", json={"prompt": "a cat"})

        assert response.status_code == 502

    def test_image_generation_disabled(self, api):
        with api(FakeAzure(), image_url=None) as client:
            response = client.post("/images", json={"prompt": "a cat"})

        assert response.status_code == 503


class TestStatusEndpoints:
    """Tests for catalog, health and status endpoints."""

    def test_functions(self, api):
        with api(FakeAzure()) as client:
            response = client.get("/functions")

        functions = response.json()["functions"]
        assert [f["name"] for f in functions] == ["GetWeather"]
        assert functions[0]["parameters"]["required"] == ["city"]

    def test_health(self, api):
        with api(FakeAzure(), image_url=None) as client:
            response = client.get("/health")

        data = response.json()
        assert data["status"] == "healthy"
        assert data["image_generation"]["enabled"] is False

    def test_function_calling_status(self, api):
        with api(FakeAzure()) as client:
            response = client.get("/function-calling/status")

        assert response.json()["functions"] == ["GetWeather"]
        assert response.json()["status"] == "operational"
