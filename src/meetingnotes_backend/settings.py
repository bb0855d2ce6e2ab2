# Application-wide configuration helpers.

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigurationError

_SETTINGS_CACHE: Settings | None = None

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}


@dataclass(slots=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    completion_api_key: str | None = None
    completion_base_url: str = "https://api.groq.com/openai/v1"
    summary_model: str = "llama3-8b-8192"
    summary_temperature: float = 0.3
    summary_max_output_tokens: int = 2048
    summary_request_timeout_seconds: float = 60.0
    resend_api_key: str | None = None
    from_email: str | None = None
    resend_base_url: str = "https://api.resend.com"
    email_subject: str = "Meeting Summary"
    email_request_timeout_seconds: float = 30.0
    user_agent: str | None = "MeetingNotes/0.1"
    strict_config: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables with sensible defaults."""
        completion_api_key = os.getenv("GROQ_API_KEY") or None
        completion_base_url = os.getenv(
            "MEETINGNOTES_COMPLETION_BASE_URL", "https://api.groq.com/openai/v1"
        )
        summary_model = os.getenv("MEETINGNOTES_SUMMARY_MODEL", "llama3-8b-8192")
        temperature_raw = os.getenv("MEETINGNOTES_SUMMARY_TEMPERATURE", "0.3")
        max_tokens_raw = os.getenv("MEETINGNOTES_SUMMARY_MAX_OUTPUT_TOKENS", "2048")
        summary_timeout_raw = os.getenv("MEETINGNOTES_SUMMARY_TIMEOUT", "60")

        try:
            summary_temperature = float(temperature_raw)
        except ValueError as exc:
            raise ValueError(
                "MEETINGNOTES_SUMMARY_TEMPERATURE must be numeric."
            ) from exc

        try:
            summary_max_output_tokens = int(max_tokens_raw)
        except ValueError as exc:
            raise ValueError(
                "MEETINGNOTES_SUMMARY_MAX_OUTPUT_TOKENS must be an integer."
            ) from exc

        try:
            summary_request_timeout_seconds = float(summary_timeout_raw)
        except ValueError as exc:
            raise ValueError("MEETINGNOTES_SUMMARY_TIMEOUT must be numeric.") from exc

        resend_api_key = os.getenv("RESEND_API_KEY") or None
        from_email = os.getenv("FROM_EMAIL") or None
        resend_base_url = os.getenv(
            "MEETINGNOTES_RESEND_BASE_URL", "https://api.resend.com"
        )
        email_subject = os.getenv("MEETINGNOTES_EMAIL_SUBJECT", "Meeting Summary")
        email_timeout_raw = os.getenv("MEETINGNOTES_EMAIL_TIMEOUT", "30")

        try:
            email_request_timeout_seconds = float(email_timeout_raw)
        except ValueError as exc:
            raise ValueError("MEETINGNOTES_EMAIL_TIMEOUT must be numeric.") from exc

        user_agent = os.getenv("MEETINGNOTES_USER_AGENT", "MeetingNotes/0.1") or None
        strict_config = (
            os.getenv("MEETINGNOTES_STRICT_CONFIG", "").strip().lower() in _TRUTHY
        )

        return cls(
            completion_api_key=completion_api_key,
            completion_base_url=completion_base_url,
            summary_model=summary_model,
            summary_temperature=summary_temperature,
            summary_max_output_tokens=summary_max_output_tokens,
            summary_request_timeout_seconds=summary_request_timeout_seconds,
            resend_api_key=resend_api_key,
            from_email=from_email,
            resend_base_url=resend_base_url,
            email_subject=email_subject,
            email_request_timeout_seconds=email_request_timeout_seconds,
            user_agent=user_agent,
            strict_config=strict_config,
        )

    def missing_summarization_fields(self) -> list[str]:
        """Return the environment variables summarization still needs."""
        return [] if self.completion_api_key else ["GROQ_API_KEY"]

    def missing_delivery_fields(self) -> list[str]:
        """Return the environment variables e-mail delivery still needs."""
        missing: list[str] = []
        if not self.resend_api_key:
            missing.append("RESEND_API_KEY")
        if not self.from_email:
            missing.append("FROM_EMAIL")
        return missing

    def require_summarization(self) -> None:
        missing = self.missing_summarization_fields()
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} not configured")

    def require_delivery(self) -> None:
        missing = self.missing_delivery_fields()
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} not configured")


def get_settings() -> Settings:
    """Return cached settings instance, constructing it on first access."""
    global _SETTINGS_CACHE

    if _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = Settings.from_env()

    return _SETTINGS_CACHE


def set_settings(settings: Settings | None) -> None:
    """Override the cached settings value (mainly intended for tests)."""
    global _SETTINGS_CACHE
    _SETTINGS_CACHE = settings


__all__ = ["Settings", "get_settings", "set_settings"]
