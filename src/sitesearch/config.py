"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_MAX_RESULTS = 10
DEFAULT_MAX_SUGGESTIONS = 5


@dataclass(slots=True)
class AppConfig:
    corpus_path: Path | None = None
    max_results: int = DEFAULT_MAX_RESULTS
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS

    def resolve_corpus_path(self, base_dir: Path | None = None) -> Path | None:
        """Return the corpus file to load, or None for the bundled corpus."""
        if self.corpus_path is None:
            return None
        if Path(self.corpus_path).is_absolute() or base_dir is None:
            return Path(self.corpus_path)
        return base_dir / self.corpus_path
