"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

from sitesearch.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.corpus_path is None
        assert config.max_results == 10
        assert config.max_suggestions == 5

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = AppConfig(corpus_path=Path("/custom/corpus.json"), max_results=3, max_suggestions=1)

        assert config.corpus_path == Path("/custom/corpus.json")
        assert config.max_results == 3
        assert config.max_suggestions == 1

    def test_resolve_bundled(self) -> None:
        """No corpus path means the bundled corpus."""
        assert AppConfig().resolve_corpus_path(Path("/project")) is None

    def test_resolve_corpus_path_absolute(self) -> None:
        """Should return absolute path as-is."""
        config = AppConfig(corpus_path=Path("/absolute/corpus.json"))

        assert config.resolve_corpus_path(Path("/base")) == Path("/absolute/corpus.json")

    def test_resolve_corpus_path_relative_no_base(self) -> None:
        """Should return relative path when no base_dir provided."""
        config = AppConfig(corpus_path=Path("data/corpus.json"))

        assert config.resolve_corpus_path() == Path("data/corpus.json")

    def test_resolve_corpus_path_relative_with_base(self) -> None:
        """Should resolve relative path against base_dir."""
        config = AppConfig(corpus_path=Path("data/corpus.json"))

        assert config.resolve_corpus_path(Path("/base")) == Path("/base/data/corpus.json")
