"""Summary e-mail delivery helpers."""

from .render import AI_DISCLAIMER, render_summary_html
from .resend import (
    DeliveryError,
    DeliveryReceipt,
    DeliveryRequestFn,
    ResendConfig,
    build_email_message,
    call_resend_api,
    send_summary_email,
)

__all__ = [
    "AI_DISCLAIMER",
    "DeliveryError",
    "DeliveryReceipt",
    "DeliveryRequestFn",
    "ResendConfig",
    "build_email_message",
    "call_resend_api",
    "render_summary_html",
    "send_summary_email",
]
