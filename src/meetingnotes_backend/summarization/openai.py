"""Meeting summarization through an OpenAI-compatible chat completion API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

import httpx

from .prompt import build_summary_prompt

logger = logging.getLogger(__name__)

NO_SUMMARY_PLACEHOLDER = "No summary generated"


@dataclass(slots=True)
class CompletionConfig:
    """Configuration for invoking the chat completion API."""

    api_key: str
    model: str = "llama3-8b-8192"
    base_url: str = "https://api.groq.com/openai/v1"
    request_timeout_seconds: float = 60.0
    temperature: float = 0.3
    max_output_tokens: int = 2048
    user_agent: str | None = "MeetingNotes/0.1"

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must be provided for summarization.")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive.")
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError("temperature must be between 0 and 2.")
        if self.max_output_tokens <= 0:
            raise ValueError("max_output_tokens must be positive.")


class SummarizationError(RuntimeError):
    """Raised when the completion service cannot produce a summary."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SummaryRequestFn(Protocol):  # pragma: no cover - Protocol runtime helper
    def __call__(
        self, *, prompt: str, config: CompletionConfig
    ) -> Mapping[str, Any]: ...


def generate_summary(
    *,
    transcript: str,
    instruction: str | None,
    config: CompletionConfig,
    request_fn: SummaryRequestFn | None = None,
) -> str:
    """Ask the completion model for a summary of ``transcript``.

    The raw completion payload is requested once; there is no retry. Blank
    model output is replaced with a placeholder so callers never receive an
    empty summary.
    """
    prompt = build_summary_prompt(transcript=transcript, instruction=instruction)
    caller = request_fn or call_chat_completion_api

    try:
        payload = caller(prompt=prompt, config=config)
    except SummarizationError:
        raise
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code if exc.response else None
        raise SummarizationError(
            f"Summarization call failed with status {status}",
            status_code=status,
        ) from exc
    except httpx.RequestError as exc:
        raise SummarizationError(
            "Summarization request failed due to network error"
        ) from exc
    except Exception as exc:
        raise SummarizationError(
            "Unexpected error while generating meeting summary"
        ) from exc

    if not isinstance(payload, Mapping):
        raise SummarizationError("Completion response must be a mapping.")

    content = extract_message_content(payload)
    if content is None or not content.strip():
        logger.warning(
            "Completion %s returned no content; using placeholder",
            payload.get("id"),
        )
        return NO_SUMMARY_PLACEHOLDER
    return content


def call_chat_completion_api(
    *,
    prompt: str,
    config: CompletionConfig,
) -> Mapping[str, Any]:
    url = f"{config.base_url.rstrip('/')}/chat/completions"
    headers = {
        "Authorization": f"Bearer {config.api_key}",
    }
    if config.user_agent:
        headers["User-Agent"] = config.user_agent

    payload = {
        "model": config.model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": config.temperature,
        "max_tokens": config.max_output_tokens,
    }

    response = httpx.post(
        url,
        headers=headers,
        json=payload,
        timeout=config.request_timeout_seconds,
    )
    response.raise_for_status()

    try:
        data = response.json()
    except ValueError as exc:
        raise SummarizationError("Completion service returned invalid JSON.") from exc
    if not isinstance(data, Mapping):
        raise SummarizationError("Unexpected response payload from completion API.")
    return data


def extract_message_content(payload: Mapping[str, Any]) -> str | None:
    """Return the text of the first choice, or ``None`` when there is none."""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None

    first = choices[0]
    if not isinstance(first, Mapping):
        return None
    message = first.get("message")
    if not isinstance(message, Mapping):
        return None

    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        joined = "".join(
            chunk.get("text", "")
            for chunk in content
            if isinstance(chunk, Mapping) and isinstance(chunk.get("text"), str)
        )
        return joined or None
    return None


__all__ = [
    "CompletionConfig",
    "NO_SUMMARY_PLACEHOLDER",
    "SummarizationError",
    "SummaryRequestFn",
    "call_chat_completion_api",
    "extract_message_content",
    "generate_summary",
]
