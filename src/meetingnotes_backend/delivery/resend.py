"""Summary delivery through the Resend transactional e-mail API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

import httpx

from .render import render_summary_html

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResendConfig:
    """Configuration for invoking the Resend ``/emails`` endpoint."""

    api_key: str
    from_email: str
    base_url: str = "https://api.resend.com"
    subject: str = "Meeting Summary"
    request_timeout_seconds: float = 30.0
    user_agent: str | None = "MeetingNotes/0.1"

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must be provided for e-mail delivery.")
        if not self.from_email:
            raise ValueError("from_email must be provided for e-mail delivery.")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive.")


@dataclass(slots=True)
class DeliveryReceipt:
    """Outcome of a successful send."""

    message_id: str | None = None


class DeliveryError(RuntimeError):
    """Raised when the e-mail service rejects or fails a send."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class DeliveryRequestFn(Protocol):  # pragma: no cover - Protocol runtime helper
    def __call__(
        self, *, message: Mapping[str, Any], config: ResendConfig
    ) -> Mapping[str, Any]: ...


def build_email_message(
    *, summary: str, recipients: Sequence[str], config: ResendConfig
) -> dict[str, Any]:
    """Compose the Resend payload for a single multi-recipient message."""
    return {
        "from": config.from_email,
        "to": list(recipients),
        "subject": config.subject,
        "html": render_summary_html(summary, heading=config.subject),
    }


def send_summary_email(
    *,
    summary: str,
    recipients: Sequence[str],
    config: ResendConfig,
    request_fn: DeliveryRequestFn | None = None,
) -> DeliveryReceipt:
    """Send ``summary`` to every address in ``recipients`` as one message."""
    if not recipients:
        raise ValueError("recipients must contain at least one address")

    message = build_email_message(summary=summary, recipients=recipients, config=config)
    caller = request_fn or call_resend_api

    try:
        payload = caller(message=message, config=config)
    except DeliveryError:
        raise
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code if exc.response else None
        raise DeliveryError(
            f"E-mail service responded with status {status}",
            status_code=status,
            detail=_response_detail(exc.response),
        ) from exc
    except httpx.RequestError as exc:
        raise DeliveryError(
            "E-mail request failed due to network error", detail=str(exc)
        ) from exc
    except Exception as exc:
        raise DeliveryError("Unexpected error while sending e-mail") from exc

    if not isinstance(payload, Mapping):
        raise DeliveryError("E-mail service response must be a mapping.")

    if payload.get("error"):
        raise DeliveryError(
            "E-mail service reported a delivery error",
            detail=payload["error"],
        )

    message_id = payload.get("id")
    return DeliveryReceipt(message_id=str(message_id) if message_id else None)


def call_resend_api(
    *,
    message: Mapping[str, Any],
    config: ResendConfig,
) -> Mapping[str, Any]:
    url = f"{config.base_url.rstrip('/')}/emails"
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
    }
    if config.user_agent:
        headers["User-Agent"] = config.user_agent

    response = httpx.post(
        url,
        headers=headers,
        json=dict(message),
        timeout=config.request_timeout_seconds,
    )
    response.raise_for_status()

    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError as exc:
        raise DeliveryError(
            "E-mail service returned invalid JSON.", detail=response.text[:500]
        ) from exc
    if not isinstance(data, Mapping):
        raise DeliveryError("Unexpected response payload from e-mail service.")
    return data


def _response_detail(response: httpx.Response | None) -> Any:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text[:500]


__all__ = [
    "DeliveryError",
    "DeliveryReceipt",
    "DeliveryRequestFn",
    "ResendConfig",
    "build_email_message",
    "call_resend_api",
    "send_summary_email",
]
