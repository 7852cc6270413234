"""Keyword search and autocomplete over a content index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, Dict, Iterable, List, Sequence

from sitesearch.config import DEFAULT_MAX_RESULTS, DEFAULT_MAX_SUGGESTIONS, AppConfig
from sitesearch.index.corpus import ContentIndex
from sitesearch.models import Record, RecordKind
from sitesearch.utils.text import join_fields, split_words, tokenize_query

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Points awarded per term for each field it occurs in.

    Every rule fires independently, so a title hit also earns the
    ``combined`` bonus.
    """

    title: int = 10
    content: int = 5
    excerpt: int = 3
    tags: int = 7
    combined: int = 2


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True, slots=True)
class ScoredRecord:
    """A record paired with its relevance score."""

    record: Record
    score: int


def score_record(
    record: Record, terms: Sequence[str], weights: ScoringWeights = DEFAULT_WEIGHTS
) -> int:
    """Sum the field contributions of every term against ``record``."""
    title = record.title.lower()
    content = record.content.lower()
    excerpt = record.excerpt.lower() if record.excerpt is not None else None
    tags = [tag.lower() for tag in record.tags]
    haystack = join_fields([record.title, record.content, record.excerpt, " ".join(record.tags)])

    score = 0
    for term in terms:
        if term in title:
            score += weights.title
        if term in content:
            score += weights.content
        if excerpt is not None and term in excerpt:
            score += weights.excerpt
        if any(term in tag for tag in tags):
            score += weights.tags
        if term in haystack:
            score += weights.combined
    return score


def rank(
    index: ContentIndex,
    query: str,
    *,
    limit: int = DEFAULT_MAX_RESULTS,
    kinds: Collection[RecordKind] | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> List[ScoredRecord]:
    """Score every record and return the best ``limit`` matches with scores."""
    terms = tokenize_query(query)
    if not terms:
        return []

    scored: List[ScoredRecord] = []
    for record in index:
        if kinds is not None and record.kind not in kinds:
            continue
        score = score_record(record, terms, weights)
        if score > 0:
            scored.append(ScoredRecord(record=record, score=score))

    # list.sort is stable, so equal scores keep corpus order
    scored.sort(key=lambda item: item.score, reverse=True)
    LOGGER.debug("Query %r: %d terms, %d matches", query, len(terms), len(scored))
    return scored[: max(limit, 0)]


def search(
    index: ContentIndex,
    query: str,
    *,
    limit: int = DEFAULT_MAX_RESULTS,
    kinds: Collection[RecordKind] | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> List[Record]:
    """Return records matching ``query`` in descending relevance."""
    return [item.record for item in rank(index, query, limit=limit, kinds=kinds, weights=weights)]


def suggest(index: ContentIndex, query: str, *, limit: int = DEFAULT_MAX_SUGGESTIONS) -> List[str]:
    """Return up to ``limit`` lowercase completions for a partial query.

    Title words must extend the query; tags only need to start with it.
    """
    if not query.strip() or limit <= 0:
        return []

    prefix = query.lower()
    suggestions: Dict[str, None] = {}
    for record in index:
        candidates = [
            word
            for word in split_words(record.title)
            if word.startswith(prefix) and len(word) > len(prefix)
        ]
        candidates.extend(tag.lower() for tag in record.tags if tag.lower().startswith(prefix))
        for candidate in candidates:
            suggestions.setdefault(candidate, None)
            if len(suggestions) >= limit:
                return list(suggestions)
    return list(suggestions)


def group_by_kind(records: Iterable[Record]) -> Dict[RecordKind, List[Record]]:
    """Group results by kind, keeping their ranked order inside each group."""
    groups: Dict[RecordKind, List[Record]] = {}
    for record in records:
        groups.setdefault(record.kind, []).append(record)
    return groups


class Searcher:
    """High-level API binding an index to configured limits."""

    def __init__(self, index: ContentIndex, *, config: AppConfig | None = None) -> None:
        self.index = index
        self.config = config or AppConfig()

    def rank(
        self, query: str, *, limit: int | None = None, kinds: Collection[RecordKind] | None = None
    ) -> List[ScoredRecord]:
        top = self.config.max_results if limit is None else limit
        return rank(self.index, query, limit=top, kinds=kinds)

    def search(
        self, query: str, *, limit: int | None = None, kinds: Collection[RecordKind] | None = None
    ) -> List[Record]:
        return [item.record for item in self.rank(query, limit=limit, kinds=kinds)]

    def suggest(self, query: str, *, limit: int | None = None) -> List[str]:
        top = self.config.max_suggestions if limit is None else limit
        return suggest(self.index, query, limit=top)
