"""Client-side transcript workspace."""

from .controller import (
    SummaryWorkspace,
    WorkspaceRequestError,
    compose_email_body,
    parse_recipients,
)
from .documents import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    TranscriptDocument,
    TranscriptStore,
    UnknownDocumentError,
    name_from_filename,
)
from .modes import SUMMARY_MODES, mode_instruction

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "SUMMARY_MODES",
    "SummaryWorkspace",
    "TranscriptDocument",
    "TranscriptStore",
    "UnknownDocumentError",
    "WorkspaceRequestError",
    "compose_email_body",
    "mode_instruction",
    "name_from_filename",
    "parse_recipients",
]
