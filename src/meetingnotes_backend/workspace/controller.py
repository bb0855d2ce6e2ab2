"""Client-side controller that drives the summarize and send-email endpoints."""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from ..summarization.prompt import DEFAULT_INSTRUCTION
from .documents import TranscriptStore
from .modes import mode_instruction

logger = logging.getLogger(__name__)

SUMMARIZE_PATH = "/api/summarize"
SEND_EMAIL_PATH = "/api/send-email"

NotifyFn = Callable[[str], None]


def parse_recipients(raw: str) -> list[str]:
    """Split a comma-separated address field, trimming and dropping blanks."""
    return [address.strip() for address in raw.split(",") if address.strip()]


def compose_email_body(*, name: str, category: str, summary: str) -> str:
    return f"{name} ({category})\n\n{summary.strip()}"


class WorkspaceRequestError(RuntimeError):
    """A proxy call returned a non-success status or could not be made."""


def _post_json(
    client: httpx.Client, path: str, payload: dict[str, Any], *, fallback: str
) -> dict[str, Any]:
    try:
        response = client.post(path, json=payload)
    except httpx.HTTPError as exc:
        raise WorkspaceRequestError(fallback) from exc

    try:
        data = response.json()
    except ValueError:
        data = None

    if response.is_error:
        message = fallback
        if isinstance(data, dict) and isinstance(data.get("error"), str):
            message = data["error"]
        raise WorkspaceRequestError(message)

    if not isinstance(data, dict):
        raise WorkspaceRequestError(fallback)
    return data


class SummaryWorkspace:
    """Holds the transcript store and the form state around it.

    ``notify`` receives every user-facing message (the equivalent of a
    blocking alert). Calls are never retried.
    """

    def __init__(
        self,
        client: httpx.Client,
        *,
        store: TranscriptStore | None = None,
        notify: NotifyFn | None = None,
    ) -> None:
        self.client = client
        self.store = store if store is not None else TranscriptStore()
        self.notify: NotifyFn = notify or logger.info
        self.instruction = DEFAULT_INSTRUCTION
        self.selected_mode: str | None = None
        self.recipients = ""
        self.summary_loading = False
        self.email_loading = False

    def apply_mode(self, mode_key: str) -> None:
        self.instruction = mode_instruction(mode_key)
        self.selected_mode = mode_key

    def set_instruction(self, instruction: str) -> None:
        """Replace the instruction with free text; no preset stays selected."""
        self.instruction = instruction
        self.selected_mode = None

    def generate_summary(self) -> str | None:
        """Summarize the active document and store the result on it.

        Returns the stored summary, or ``None`` when nothing was stored.
        """
        if self.summary_loading:
            logger.debug("Summary request already in flight; ignoring")
            return None

        document = self.store.active_document
        if document is None or not document.content.strip():
            self.notify("Please enter or upload a transcript")
            return None

        target_id = document.id
        payload = {
            "transcript": document.content.strip(),
            "instruction": self.instruction.strip() or DEFAULT_INSTRUCTION,
        }

        self.summary_loading = True
        try:
            data = _post_json(
                self.client,
                SUMMARIZE_PATH,
                payload,
                fallback="Failed to generate summary",
            )
        except WorkspaceRequestError as exc:
            self.notify(f"Error generating summary: {exc}")
            return None
        finally:
            self.summary_loading = False

        summary = data.get("summary")
        if not isinstance(summary, str):
            self.notify("Error generating summary: Failed to generate summary")
            return None

        if target_id not in self.store or self.store.active_id != target_id:
            logger.info(
                "Discarding summary for transcript %s; it is no longer active",
                target_id,
            )
            return None

        self.store.update_document(target_id, summary=summary)
        return summary

    def send_summary(self) -> bool:
        """E-mail the active document's summary to the recipients field."""
        if self.email_loading:
            logger.debug("E-mail request already in flight; ignoring")
            return False

        document = self.store.active_document
        if document is None or not (document.summary or "").strip():
            self.notify("Please generate a summary first")
            return False

        if not self.recipients.strip():
            self.notify("Please enter recipient email addresses")
            return False

        payload = {
            "summary": compose_email_body(
                name=document.name,
                category=document.category,
                summary=document.summary or "",
            ),
            "emails": parse_recipients(self.recipients),
        }

        self.email_loading = True
        try:
            _post_json(
                self.client,
                SEND_EMAIL_PATH,
                payload,
                fallback="Failed to send email",
            )
        except WorkspaceRequestError as exc:
            self.notify(f"Error sending email: {exc}")
            return False
        finally:
            self.email_loading = False

        self.notify("Summary sent successfully!")
        return True


__all__ = [
    "SEND_EMAIL_PATH",
    "SUMMARIZE_PATH",
    "SummaryWorkspace",
    "WorkspaceRequestError",
    "compose_email_body",
    "parse_recipients",
]
