"""Delivery proxy endpoint for e-mailing summaries."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..delivery import DeliveryError, DeliveryRequestFn, send_summary_email
from ..errors import UpstreamError, ValidationError
from ..settings import Settings, get_settings
from ..upstreams import build_resend_config, get_delivery_request_fn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/send-email", tags=["email"])


class SendEmailRequest(BaseModel):
    summary: str | None = Field(None, description="Summary text to deliver.")
    emails: list[str] | None = Field(None, description="Recipient addresses.")


class SendEmailResponse(BaseModel):
    success: bool = True
    message_id: str | None = Field(
        None,
        serialization_alias="messageId",
        description="Provider message identifier, when one was returned.",
    )


def _get_delivery_request_fn() -> DeliveryRequestFn:
    return get_delivery_request_fn()


def send_email(
    body: SendEmailRequest,
    settings: Settings = Depends(get_settings),
    request_fn: DeliveryRequestFn = Depends(_get_delivery_request_fn),
) -> SendEmailResponse:
    """Deliver a summary to the listed recipients in a single message."""
    if not body.summary or not body.summary.strip():
        raise ValidationError("Summary is required")

    recipients = [email.strip() for email in body.emails or [] if email.strip()]
    if not recipients:
        raise ValidationError("Email addresses are required")

    config = build_resend_config(settings)

    try:
        receipt = send_summary_email(
            summary=body.summary,
            recipients=recipients,
            config=config,
            request_fn=request_fn,
        )
    except DeliveryError as exc:
        logger.error(
            "E-mail delivery failed (status=%s): %s detail=%r",
            exc.status_code,
            exc,
            exc.detail,
        )
        raise UpstreamError("Failed to send email") from exc

    logger.info(
        "Summary e-mail accepted for %d recipient(s); id=%s",
        len(recipients),
        receipt.message_id,
    )
    return SendEmailResponse(success=True, message_id=receipt.message_id)


router.add_api_route(
    "",
    send_email,
    methods=["POST"],
    response_model=SendEmailResponse,
    response_model_exclude_none=True,
    summary="E-mail a meeting summary to one or more recipients",
)

__all__ = ["router", "SendEmailRequest", "SendEmailResponse"]
