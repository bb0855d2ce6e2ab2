"""Upstream client helpers shared by the proxy endpoints."""

from __future__ import annotations

from .delivery import DeliveryRequestFn, ResendConfig, call_resend_api
from .errors import ConfigurationError
from .settings import Settings
from .summarization import CompletionConfig, SummaryRequestFn, call_chat_completion_api

_SUMMARY_REQUEST_FN: SummaryRequestFn | None = None
_DELIVERY_REQUEST_FN: DeliveryRequestFn | None = None


def build_completion_config(settings: Settings) -> CompletionConfig:
    """Translate settings into a completion config, failing on missing secrets."""
    settings.require_summarization()
    try:
        return CompletionConfig(
            api_key=settings.completion_api_key or "",
            model=settings.summary_model,
            base_url=settings.completion_base_url,
            request_timeout_seconds=settings.summary_request_timeout_seconds,
            temperature=settings.summary_temperature,
            max_output_tokens=settings.summary_max_output_tokens,
            user_agent=settings.user_agent,
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid summarization settings: {exc}") from exc


def build_resend_config(settings: Settings) -> ResendConfig:
    """Translate settings into a Resend config, failing on missing secrets."""
    settings.require_delivery()
    try:
        return ResendConfig(
            api_key=settings.resend_api_key or "",
            from_email=settings.from_email or "",
            base_url=settings.resend_base_url,
            subject=settings.email_subject,
            request_timeout_seconds=settings.email_request_timeout_seconds,
            user_agent=settings.user_agent,
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid e-mail settings: {exc}") from exc


def get_summary_request_fn() -> SummaryRequestFn:
    """Return the callable used to reach the completion API."""
    return _SUMMARY_REQUEST_FN or call_chat_completion_api


def set_summary_request_fn(request_fn: SummaryRequestFn | None) -> None:
    """Override the completion caller, mainly for testing."""
    global _SUMMARY_REQUEST_FN
    _SUMMARY_REQUEST_FN = request_fn


def get_delivery_request_fn() -> DeliveryRequestFn:
    """Return the callable used to reach the e-mail API."""
    return _DELIVERY_REQUEST_FN or call_resend_api


def set_delivery_request_fn(request_fn: DeliveryRequestFn | None) -> None:
    """Override the e-mail caller, mainly for testing."""
    global _DELIVERY_REQUEST_FN
    _DELIVERY_REQUEST_FN = request_fn


__all__ = [
    "build_completion_config",
    "build_resend_config",
    "get_delivery_request_fn",
    "get_summary_request_fn",
    "set_delivery_request_fn",
    "set_summary_request_fn",
]
