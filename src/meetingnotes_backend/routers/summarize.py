"""Summarization proxy endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..errors import UpstreamError, ValidationError
from ..settings import Settings, get_settings
from ..summarization import SummarizationError, SummaryRequestFn, generate_summary
from ..upstreams import build_completion_config, get_summary_request_fn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/summarize", tags=["summarize"])


class SummarizeRequest(BaseModel):
    transcript: str | None = Field(None, description="Raw meeting transcript.")
    instruction: str | None = Field(
        None, description="Free-text instruction; blank means the default one."
    )


class SummarizeResponse(BaseModel):
    summary: str


def _get_summary_request_fn() -> SummaryRequestFn:
    return get_summary_request_fn()


def summarize_transcript(
    body: SummarizeRequest,
    settings: Settings = Depends(get_settings),
    request_fn: SummaryRequestFn = Depends(_get_summary_request_fn),
) -> SummarizeResponse:
    """Forward a transcript and instruction to the completion model."""
    if not body.transcript or not body.transcript.strip():
        raise ValidationError("Transcript is required")

    config = build_completion_config(settings)

    try:
        summary = generate_summary(
            transcript=body.transcript,
            instruction=body.instruction,
            config=config,
            request_fn=request_fn,
        )
    except SummarizationError as exc:
        logger.exception(
            "Error generating summary (upstream status=%s)", exc.status_code
        )
        raise UpstreamError("Failed to generate summary") from exc

    return SummarizeResponse(summary=summary)


router.add_api_route(
    "",
    summarize_transcript,
    methods=["POST"],
    response_model=SummarizeResponse,
    summary="Generate a meeting summary from a transcript",
)

__all__ = ["router", "SummarizeRequest", "SummarizeResponse"]
