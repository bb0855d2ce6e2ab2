from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from meetingnotes_backend.app import create_app
from meetingnotes_backend.settings import Settings, set_settings
from meetingnotes_backend.summarization import DEFAULT_INSTRUCTION
from meetingnotes_backend.upstreams import set_summary_request_fn


class _StubCompletion:
    def __init__(self, content: object = "Key points: ship Friday.") -> None:
        self.content = content
        self.prompts: list[str] = []

    def __call__(self, *, prompt, config):
        self.prompts.append(prompt)
        return {"choices": [{"message": {"content": self.content}}]}


@pytest.fixture(autouse=True)
def configured_settings() -> Iterator[None]:
    set_settings(Settings(completion_api_key="groq-key"))
    yield
    set_settings(None)


@pytest.fixture(autouse=True)
def stub_completion() -> Iterator[_StubCompletion]:
    """Keep API handlers from reaching the real completion service."""
    stub = _StubCompletion()
    set_summary_request_fn(stub)
    yield stub
    set_summary_request_fn(None)


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_summarize_returns_model_output(client, stub_completion) -> None:
    response = client.post(
        "/api/summarize",
        json={"transcript": "Alice: we ship Friday.", "instruction": "List decisions."},
    )

    assert response.status_code == 200
    assert response.json() == {"summary": "Key points: ship Friday."}
    prompt = stub_completion.prompts[0]
    assert prompt.startswith("List decisions.")
    assert "Meeting Transcript:\nAlice: we ship Friday." in prompt


def test_summarize_defaults_blank_instruction(client, stub_completion) -> None:
    response = client.post(
        "/api/summarize", json={"transcript": "Bob: status update", "instruction": ""}
    )

    assert response.status_code == 200
    assert stub_completion.prompts[0].startswith(DEFAULT_INSTRUCTION)


def test_summarize_never_returns_empty_summary(client, stub_completion) -> None:
    stub_completion.content = ""

    response = client.post(
        "/api/summarize", json={"transcript": "Bob: status", "instruction": "Go"}
    )

    assert response.status_code == 200
    assert response.json()["summary"] == "No summary generated"


@pytest.mark.parametrize(
    "body",
    [
        {"instruction": "Summarize"},
        {"transcript": "", "instruction": "Summarize"},
        {"transcript": "   ", "instruction": "Summarize"},
        {"transcript": 42, "instruction": "Summarize"},
        {"transcript": ["a", "b"], "instruction": "Summarize"},
    ],
)
def test_summarize_rejects_invalid_transcript(client, stub_completion, body) -> None:
    response = client.post("/api/summarize", json=body)

    assert response.status_code == 400
    assert "error" in response.json()
    assert stub_completion.prompts == []


def test_summarize_rejects_non_json_body(client) -> None:
    response = client.post(
        "/api/summarize",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_summarize_requires_credential(client, stub_completion) -> None:
    set_settings(Settings())

    response = client.post(
        "/api/summarize", json={"transcript": "Bob: status", "instruction": "Go"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "GROQ_API_KEY not configured"}
    assert stub_completion.prompts == []


def test_summarize_reports_upstream_failure(client) -> None:
    def failing_request(*, prompt, config):
        raise httpx.ConnectError("connection refused")

    set_summary_request_fn(failing_request)

    response = client.post(
        "/api/summarize", json={"transcript": "Bob: status", "instruction": "Go"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate summary"}
