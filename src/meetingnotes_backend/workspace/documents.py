"""In-memory transcript documents and the store that owns them."""

from __future__ import annotations

import logging
import secrets
import string
import time
from dataclasses import dataclass, fields
from pathlib import PurePath
from typing import Any, Iterator

logger = logging.getLogger(__name__)

CATEGORIES: tuple[str, ...] = (
    "Client Call",
    "Team Sync",
    "Project Review",
    "Strategy Meeting",
    "One-on-One",
    "Other",
)
DEFAULT_CATEGORY = "Other"

_ID_ALPHABET = string.digits + string.ascii_lowercase
_PLAIN_TEXT = "text/plain"


def _generate_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"{int(time.time() * 1000)}-{suffix}"


def _check_category(category: str) -> str:
    if category not in CATEGORIES:
        raise ValueError(
            f"category must be one of {list(CATEGORIES)}, got {category!r}"
        )
    return category


def _check_types(values: dict[str, Any]) -> None:
    for key in ("name", "content"):
        if key in values and not isinstance(values[key], str):
            raise TypeError(f"{key} must be a string, got {type(values[key]).__name__}")
    summary = values.get("summary")
    if summary is not None and not isinstance(summary, str):
        raise TypeError(f"summary must be a string or None, got {type(summary).__name__}")


def name_from_filename(filename: str) -> str:
    """Derive a display name from an uploaded file name (``standup.txt`` -> ``standup``)."""
    name = PurePath(filename).name
    if name.lower().endswith(".txt"):
        name = name[: -len(".txt")]
    return name


@dataclass(slots=True)
class TranscriptDocument:
    """A transcript plus its metadata and optional summary."""

    id: str
    name: str
    content: str = ""
    category: str = DEFAULT_CATEGORY
    summary: str | None = None

    def __post_init__(self) -> None:
        _check_types(
            {"name": self.name, "content": self.content, "summary": self.summary}
        )
        _check_category(self.category)


_EDITABLE_FIELDS = frozenset(
    field.name for field in fields(TranscriptDocument) if field.name != "id"
)


class UnknownDocumentError(LookupError):
    """Raised when selecting a document id the store does not hold."""


class TranscriptStore:
    """Ordered collection of transcript documents with one optional active entry.

    The active id, when set, always refers to a document in the store.
    """

    def __init__(self) -> None:
        self._documents: list[TranscriptDocument] = []
        self._active_id: str | None = None
        self._issued_ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[TranscriptDocument]:
        return iter(list(self._documents))

    def __contains__(self, document_id: object) -> bool:
        return any(document.id == document_id for document in self._documents)

    @property
    def documents(self) -> list[TranscriptDocument]:
        return list(self._documents)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active_document(self) -> TranscriptDocument | None:
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    def get(self, document_id: str) -> TranscriptDocument | None:
        for document in self._documents:
            if document.id == document_id:
                return document
        return None

    def _new_id(self) -> str:
        document_id = _generate_id()
        while document_id in self._issued_ids:
            document_id = _generate_id()
        self._issued_ids.add(document_id)
        return document_id

    def add_document(
        self,
        *,
        name: str | None = None,
        content: str = "",
        category: str = DEFAULT_CATEGORY,
        summary: str | None = None,
    ) -> TranscriptDocument:
        """Append a document; it becomes active when nothing else is."""
        document = TranscriptDocument(
            id=self._new_id(),
            name=name if name is not None else f"Meeting {len(self._documents) + 1}",
            content=content,
            category=category,
            summary=summary,
        )
        self._documents.append(document)
        if self._active_id is None:
            self._active_id = document.id
        return document

    def new_document(self) -> TranscriptDocument:
        """Add an empty ``Meeting N`` document and make it active."""
        document = self.add_document()
        self._active_id = document.id
        return document

    def add_uploaded_file(
        self, filename: str, content: str, *, content_type: str = _PLAIN_TEXT
    ) -> TranscriptDocument | None:
        """Create a document from an uploaded plain-text file.

        Files with any other content type are skipped and ``None`` is returned.
        """
        if content_type != _PLAIN_TEXT:
            logger.info("Skipping upload %s with content type %s", filename, content_type)
            return None
        return self.add_document(name=name_from_filename(filename), content=content)

    def update_document(self, document_id: str, **updates: Any) -> None:
        """Merge ``updates`` into the matching document; unknown ids are ignored."""
        unknown = set(updates) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"cannot update field(s): {', '.join(sorted(unknown))}")
        _check_types(updates)
        if "category" in updates:
            _check_category(updates["category"])

        document = self.get(document_id)
        if document is None:
            return
        for key, value in updates.items():
            setattr(document, key, value)

    def delete_document(self, document_id: str) -> None:
        """Remove a document, re-selecting the first remaining one if it was active."""
        self._documents = [
            document for document in self._documents if document.id != document_id
        ]
        if self._active_id == document_id:
            self._active_id = self._documents[0].id if self._documents else None

    def select_document(self, document_id: str) -> None:
        if document_id not in self:
            raise UnknownDocumentError(f"no transcript with id {document_id!r}")
        self._active_id = document_id


__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "TranscriptDocument",
    "TranscriptStore",
    "UnknownDocumentError",
    "name_from_filename",
]
