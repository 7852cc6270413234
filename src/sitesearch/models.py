"""Core SiteSearch data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping


class CorpusError(ValueError):
    """Raised when corpus data violates the record invariants."""


class RecordKind(str, Enum):
    """Closed set of content categories."""

    PAGE = "page"
    PUBLICATION = "publication"
    BLOG = "blog"
    TEACHING = "teaching"

    @classmethod
    def parse(cls, value: Any) -> "RecordKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(kind.value for kind in cls)
            raise CorpusError(f"Unknown record kind {value!r} (expected one of: {allowed})") from exc


@dataclass(frozen=True, slots=True)
class RecordMetadata:
    """Display-only details shown next to a result."""

    date: str | None = None
    journal: str | None = None
    year: str | None = None

    def to_dict(self) -> Dict[str, str]:
        data = {"date": self.date, "journal": self.journal, "year": self.year}
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True, slots=True)
class Record:
    """One searchable unit of site content."""

    id: str
    title: str
    content: str
    kind: RecordKind
    target: str
    excerpt: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    metadata: RecordMetadata | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        """Build a record from a JSON mapping.

        ``type`` and ``url`` are accepted in place of ``kind`` and ``target``,
        and tags may sit either at the top level or under ``metadata.tags``.
        """
        if not isinstance(data, Mapping):
            raise CorpusError(f"Record entry must be an object, got {type(data).__name__}")

        record_id = _require_str(data, "id", "<unknown>")
        title = _require_str(data, "title", record_id)
        content = _require_str(data, "content", record_id)
        kind = RecordKind.parse(data.get("kind", data.get("type")))
        target = data.get("target", data.get("url"))
        if not isinstance(target, str) or not target:
            raise CorpusError(f"Record {record_id!r} is missing a target")

        excerpt = data.get("excerpt")
        if excerpt is not None and not isinstance(excerpt, str):
            raise CorpusError(f"Record {record_id!r} has a non-string excerpt")

        raw_meta = data.get("metadata") or {}
        if not isinstance(raw_meta, Mapping):
            raise CorpusError(f"Record {record_id!r} has malformed metadata")
        tags = data.get("tags", raw_meta.get("tags")) or ()
        if not isinstance(tags, (list, tuple)) or not all(isinstance(tag, str) for tag in tags):
            raise CorpusError(f"Record {record_id!r} tags must be a list of strings")

        metadata = None
        if any(raw_meta.get(key) is not None for key in ("date", "journal", "year")):
            metadata = RecordMetadata(
                date=_optional_str(raw_meta.get("date")),
                journal=_optional_str(raw_meta.get("journal")),
                year=_optional_str(raw_meta.get("year")),
            )

        return cls(
            id=record_id,
            title=title,
            content=content,
            kind=kind,
            target=target,
            excerpt=excerpt,
            tags=tuple(tags),
            metadata=metadata,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "kind": self.kind.value,
            "target": self.target,
        }
        if self.excerpt is not None:
            data["excerpt"] = self.excerpt
        if self.tags:
            data["tags"] = list(self.tags)
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data


def _require_str(data: Mapping[str, Any], key: str, record_id: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise CorpusError(f"Record {record_id!r} is missing required field {key!r}")
    return value


def _optional_str(value: Any) -> str | None:
    # years may be given as bare numbers
    return None if value is None else str(value)
