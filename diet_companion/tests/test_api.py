"""
HTTP contract tests.

Uses FastAPI TestClient with fake providers injected, no network.
"""
from fastapi.testclient import TestClient

from diet_companion.api import app as app_module
from diet_companion.api.app import create_app
from diet_companion.domain.exceptions import ApiError, InternalError
from diet_companion.flows import CHAT_FAILURE_REPLY, ChatOptions, ChatOrchestrator
from diet_companion.tests.fakes import FakeCompletion, FakeImages


def _client(completion=None, images=None):
    orchestrator = ChatOrchestrator(
        completion_client=completion or FakeCompletion(),
        image_client=images or FakeImages(),
        chat_options=ChatOptions(),
        image_generation_enabled=True,
    )
    return TestClient(create_app(orchestrator))


def test_chat_success_without_images():
    response = _client().post("/chat", json={"message": "I feel stressed today"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["response"] == "多喝水，少吃糖"
    assert "images" not in data
    assert data["timestamp"].endswith("Z")


def test_chat_success_with_images():
    payload = {
        "message": "我想吃火锅",
        "conversationHistory": [{"role": "assistant", "content": "今天过得怎么样？"}],
        "role": "nutritionist",
    }
    response = _client().post("/chat", json=payload)
    assert response.status_code == 200
    assert response.json()["images"] == ["https://img/1.png"]


def test_chat_missing_message_is_400_without_upstream_call():
    completion = FakeCompletion()
    images = FakeImages()
    response = _client(completion, images).post("/chat", json={"conversationHistory": []})
    assert response.status_code == 400
    assert "error" in response.json()
    assert completion.requests == []
    assert images.prompts == []


def test_chat_wrong_types_are_400():
    client = _client()
    assert client.post("/chat", json={"message": 42}).status_code == 400
    assert client.post("/chat", json={"message": "hi", "conversationHistory": {"a": 1}}).status_code == 400
    assert client.post("/chat", json={"message": "hi", "conversationHistory": None}).status_code == 400
    assert client.post("/chat", json=["hi"]).status_code == 400


def test_chat_invalid_json_is_400():
    response = _client().post(
        "/chat",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_upstream_failure_still_returns_200():
    completion = FakeCompletion(error=ApiError(code="API_ERROR", message="down"))
    response = _client(completion).post("/chat", json={"message": "hello"})
    assert response.status_code == 200
    assert response.json()["response"] == CHAT_FAILURE_REPLY


def test_unexpected_failure_is_500(monkeypatch):
    completion = FakeCompletion(error=RuntimeError("kaboom"))
    monkeypatch.setattr(app_module.settings, "app_env", "production")
    response = _client(completion).post("/chat", json={"message": "hello"})
    assert response.status_code == 500
    data = response.json()
    assert data == {"success": False, "error": "Failed to process chat request"}


def test_unexpected_failure_details_in_development(monkeypatch):
    completion = FakeCompletion(error=RuntimeError("kaboom"))
    monkeypatch.setattr(app_module.settings, "app_env", "development")
    response = _client(completion).post("/chat", json={"message": "hello"})
    assert response.status_code == 500
    assert response.json()["details"] == "kaboom"


def test_internal_error_keeps_its_code_and_message(monkeypatch):
    completion = FakeCompletion(error=InternalError(code="PROMPT_MISSING", message="system prompt not found"))
    monkeypatch.setattr(app_module.settings, "app_env", "development")
    response = _client(completion).post("/chat", json={"message": "hello"})
    assert response.status_code == 500
    assert response.json()["details"] == "system prompt not found"


def test_cors_origins_come_from_settings(monkeypatch):
    monkeypatch.setattr(app_module.settings, "cors_allow_origins", ["https://diet.example.com"])
    client = _client()
    headers = {"Origin": "https://diet.example.com", "Access-Control-Request-Method": "POST"}
    allowed = client.options("/chat", headers=headers)
    assert allowed.headers["access-control-allow-origin"] == "https://diet.example.com"
    denied = client.options("/chat", headers={**headers, "Origin": "http://localhost:3000"})
    assert "access-control-allow-origin" not in denied.headers


def test_health_check():
    response = _client().get("/chat")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "weight-loss-assistant-chat-api"
    assert data["api"] == "doubao"
    assert data["apiConfigured"] is True
    assert data["apiModel"] == "fake-model"
    assert "timestamp" in data


def test_roles():
    response = _client().get("/chat/roles")
    assert response.status_code == 200
    ids = [r["id"] for r in response.json()["roles"]]
    assert ids == ["supportive_friend", "nutritionist", "fitness_trainer"]
