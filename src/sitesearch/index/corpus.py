"""Immutable content index and corpus loading."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Iterable, Iterator

from sitesearch.models import CorpusError, Record, RecordKind

LOGGER = logging.getLogger(__name__)


class ContentIndex:
    """Fixed, validated collection of records kept in corpus order.

    Validation runs once at construction; there are no mutating operations,
    so an index can be shared freely between threads.
    """

    __slots__ = ("_records", "_by_id")

    def __init__(self, records: Iterable[Record]) -> None:
        # tags are always stored as tuples
        records = tuple(
            record if isinstance(record.tags, tuple) else replace(record, tags=tuple(record.tags))
            for record in records
        )
        by_id: dict[str, Record] = {}
        for record in records:
            if not record.id:
                raise CorpusError("Record with empty id")
            if record.id in by_id:
                raise CorpusError(f"Duplicate record id {record.id!r}")
            if not record.title.strip():
                raise CorpusError(f"Record {record.id!r} has an empty title")
            if not record.content.strip():
                raise CorpusError(f"Record {record.id!r} has empty content")
            by_id[record.id] = record
        self._records = records
        self._by_id = by_id

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ContentIndex({len(self._records)} records)"

    def get(self, record_id: str) -> Record | None:
        return self._by_id.get(record_id)

    def kinds(self) -> list[RecordKind]:
        """Kinds present in the index, in first-seen order."""
        seen: dict[RecordKind, None] = {}
        for record in self._records:
            seen.setdefault(record.kind, None)
        return list(seen)


def parse_corpus(raw: str, *, source: str = "<string>") -> ContentIndex:
    """Build an index from a JSON array of record objects."""
    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorpusError(f"Corpus {source} is not valid JSON: {exc}") from exc
    if not isinstance(entries, list):
        raise CorpusError(f"Corpus {source} must be a JSON array of records")
    return ContentIndex(Record.from_dict(entry) for entry in entries)


def _read_bundled_corpus() -> str:
    resource = files("sitesearch.data").joinpath("corpus.json")
    return resource.read_text(encoding="utf-8")


def load_corpus(path: Path | None = None) -> ContentIndex:
    """Load a corpus file, or the bundled corpus when ``path`` is None."""
    if path is None:
        raw, source = _read_bundled_corpus(), "bundled corpus"
    else:
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise CorpusError(f"Unable to read corpus {path}: {exc}") from exc
        source = str(path)

    index = parse_corpus(raw, source=source)
    LOGGER.info("Loaded %d records from %s", len(index), source)
    return index


@lru_cache(maxsize=1)
def default_index() -> ContentIndex:
    """Process-wide index built from the bundled corpus."""
    return load_corpus()
