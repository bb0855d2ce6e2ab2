from collections.abc import Iterator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from meetingnotes_backend.app import create_app
from meetingnotes_backend.settings import Settings, set_settings
from meetingnotes_backend.upstreams import set_delivery_request_fn


class _StubResend:
    def __init__(self) -> None:
        self.messages: list[dict[str, object]] = []
        self.response: dict[str, object] = {"id": "email-123"}

    def __call__(self, *, message, config) -> dict[str, object]:
        self.messages.append(dict(message))
        return self.response


@pytest.fixture(autouse=True)
def configured_settings() -> Iterator[None]:
    set_settings(Settings(resend_api_key="re_test", from_email="notes@example.com"))
    yield
    set_settings(None)


@pytest.fixture(autouse=True)
def stub_resend() -> Iterator[_StubResend]:
    """Keep API handlers from reaching the real e-mail service."""
    stub = _StubResend()
    set_delivery_request_fn(stub)
    yield stub
    set_delivery_request_fn(None)


def _create_test_client() -> AsyncClient:
    app = create_app()
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://testserver")


@pytest.mark.asyncio
async def test_send_email_delivers_one_message(stub_resend: _StubResend) -> None:
    async with _create_test_client() as client:
        response = await client.post(
            "/api/send-email",
            json={
                "summary": "Standup (Team Sync)\n\nAll green.",
                "emails": ["a@x.com", "b@y.com"],
            },
        )

    assert response.status_code == 200
    assert response.json() == {"success": True, "messageId": "email-123"}

    assert len(stub_resend.messages) == 1
    message = stub_resend.messages[0]
    assert message["to"] == ["a@x.com", "b@y.com"]
    assert message["from"] == "notes@example.com"
    assert message["subject"] == "Meeting Summary"
    assert "Standup (Team Sync)<br><br>All green." in str(message["html"])


@pytest.mark.asyncio
async def test_send_email_omits_missing_message_id(stub_resend: _StubResend) -> None:
    stub_resend.response = {}

    async with _create_test_client() as client:
        response = await client.post(
            "/api/send-email", json={"summary": "Done.", "emails": ["a@x.com"]}
        )

    assert response.status_code == 200
    assert response.json() == {"success": True}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"emails": ["a@x.com"]},
        {"summary": "", "emails": ["a@x.com"]},
        {"summary": "Done."},
        {"summary": "Done.", "emails": []},
        {"summary": "Done.", "emails": "a@x.com"},
        {"summary": "Done.", "emails": ["", "  "]},
    ],
)
async def test_send_email_rejects_invalid_input(
    stub_resend: _StubResend, body: dict[str, object]
) -> None:
    async with _create_test_client() as client:
        response = await client.post("/api/send-email", json=body)

    assert response.status_code == 400
    assert "error" in response.json()
    assert stub_resend.messages == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("settings", "missing"),
    [
        (Settings(from_email="notes@example.com"), "RESEND_API_KEY"),
        (Settings(resend_api_key="re_test"), "FROM_EMAIL"),
    ],
)
async def test_send_email_requires_configuration(
    stub_resend: _StubResend, settings: Settings, missing: str
) -> None:
    set_settings(settings)

    async with _create_test_client() as client:
        response = await client.post(
            "/api/send-email", json={"summary": "Done.", "emails": ["a@x.com"]}
        )

    assert response.status_code == 500
    assert response.json() == {"error": f"{missing} not configured"}
    assert stub_resend.messages == []


@pytest.mark.asyncio
async def test_send_email_logs_service_error(caplog) -> None:
    request = httpx.Request("POST", "https://api.resend.com/emails")
    rejected = httpx.Response(
        403, request=request, json={"name": "invalid_from_address"}
    )

    def failing_request(*, message, config):
        raise httpx.HTTPStatusError("forbidden", request=request, response=rejected)

    set_delivery_request_fn(failing_request)

    with caplog.at_level("ERROR", logger="meetingnotes_backend.routers.emails"):
        async with _create_test_client() as client:
            response = await client.post(
                "/api/send-email", json={"summary": "Done.", "emails": ["a@x.com"]}
            )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send email"}
    assert "invalid_from_address" in caplog.text
