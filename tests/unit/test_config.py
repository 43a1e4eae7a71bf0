"""Unit tests for Settings and the YAML config loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from groupie_tracker.config.loader import load_config
from groupie_tracker.config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FETCH_TIMEOUT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.artists_url.endswith("/api/artists")
        assert settings.relations_url.endswith("/api/relation")
        assert settings.fetch_timeout == 10.0
        assert settings.refresh_interval == 0.0

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCH_TIMEOUT", "3.5")
        monkeypatch.setenv("ARTISTS_URL", "http://localhost/artists")
        settings = Settings(_env_file=None)
        assert settings.fetch_timeout == 3.5
        assert settings.artists_url == "http://localhost/artists"

    def test_source_urls_keyed_by_section(self) -> None:
        settings = Settings(_env_file=None, dates_url="http://x/dates")
        urls = settings.source_urls()
        assert set(urls) == {"performers", "venues", "dates", "relations"}
        assert urls["dates"] == "http://x/dates"


class TestLoadConfig:
    def test_merges_yaml_with_settings(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "catalog:\n  join_mode: positional\nsearch:\n  suggestion_limit: 5\n"
        )
        settings = Settings(_env_file=None, fetch_timeout=4.0, log_level="DEBUG")

        config = load_config(str(config_file), settings=settings)

        assert config["catalog"]["join_mode"] == "positional"
        assert config["catalog"]["fetch_timeout"] == 4.0
        assert config["catalog"]["sources"]["performers"] == settings.artists_url
        assert config["search"]["suggestion_limit"] == 5
        assert config["logging"]["level"] == "DEBUG"

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=Settings(_env_file=None))
        assert "join_mode" not in config["catalog"]
        assert config["app"]["port"] == 8080

    def test_repo_config_defaults(self) -> None:
        repo_config = Path(__file__).resolve().parents[2] / "config" / "config.yaml"
        config = load_config(str(repo_config), settings=Settings(_env_file=None))
        assert config["catalog"]["join_mode"] == "positional"
        assert config["search"]["suggestion_limit"] == 10
