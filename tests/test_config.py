"""Tests for PipelineConfig, pipeline enums, settings, and config wiring."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from garagescout.api.main import app
from garagescout.config import Settings
from garagescout.pipeline_config import (
    DEFAULT_MAPS_SEARCH_URL,
    MapLinkMode,
    MarkupFormat,
    PipelineConfig,
)

client = TestClient(app)

DOCUMENT = "* **Joe's Garage**\n> 🗺️ MapCo"


# ---------------------------------------------------------------------------
# Enum tests
# ---------------------------------------------------------------------------


class TestMarkupFormat:
    def test_values(self) -> None:
        assert MarkupFormat.MARKDOWN.value == "markdown"
        assert MarkupFormat.HTML.value == "html"
        assert MarkupFormat.TEXT.value == "text"

    def test_from_string(self) -> None:
        assert MarkupFormat("html") is MarkupFormat.HTML

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            MarkupFormat("rtf")

    def test_is_str_subclass(self) -> None:
        """Enum values behave as plain strings for JSON serialization."""
        assert isinstance(MarkupFormat.MARKDOWN, str)


class TestMapLinkMode:
    def test_values(self) -> None:
        assert MapLinkMode.SEARCH.value == "search"
        assert MapLinkMode.DIRECT.value == "direct"

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            MapLinkMode("invalid")


# ---------------------------------------------------------------------------
# PipelineConfig tests
# ---------------------------------------------------------------------------


class TestPipelineConfig:
    def test_defaults(self) -> None:
        cfg = PipelineConfig()
        assert cfg.markup_format is MarkupFormat.MARKDOWN
        assert cfg.map_link_mode is MapLinkMode.SEARCH
        assert cfg.maps_search_url == DEFAULT_MAPS_SEARCH_URL

    def test_immutable(self) -> None:
        cfg = PipelineConfig()
        with pytest.raises(AttributeError):
            cfg.map_link_mode = MapLinkMode.DIRECT  # type: ignore[misc]

    def test_equal_configs_are_equal(self) -> None:
        assert PipelineConfig() == PipelineConfig()


# ---------------------------------------------------------------------------
# Settings tests
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DEFAULT_FORMAT", raising=False)
        monkeypatch.delenv("DEFAULT_MAP_LINK_MODE", raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.default_format is MarkupFormat.MARKDOWN
        assert s.default_map_link_mode is MapLinkMode.SEARCH
        assert s.maps_search_url == DEFAULT_MAPS_SEARCH_URL

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_MAP_LINK_MODE", "direct")
        monkeypatch.setenv("DEFAULT_FORMAT", "html")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.default_map_link_mode is MapLinkMode.DIRECT
        assert s.default_format is MarkupFormat.HTML

    def test_invalid_env_value_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_MAP_LINK_MODE", "sideways")
        with pytest.raises(ValueError):
            Settings(_env_file=None)  # type: ignore[call-arg]


# ---------------------------------------------------------------------------
# API endpoint config tests
# ---------------------------------------------------------------------------


class TestRenderEndpointConfig:
    def test_default_mode_is_search(self) -> None:
        response = client.post("/api/recommendations/render", json={"document": DOCUMENT})
        assert response.status_code == 200
        target = response.json()["items"][0]["actions"][0]["target"]
        assert target.endswith("?api=1&query=MapCo")

    def test_direct_mode_from_request(self) -> None:
        response = client.post(
            "/api/recommendations/render",
            json={"document": DOCUMENT, "map_link_mode": "direct"},
        )
        assert response.status_code == 200
        assert response.json()["items"][0]["actions"][0]["target"] == "https://MapCo"

    def test_rejects_invalid_mode(self) -> None:
        response = client.post(
            "/api/recommendations/render",
            json={"document": DOCUMENT, "map_link_mode": "sideways"},
        )
        assert response.status_code == 422

    def test_rejects_invalid_format(self) -> None:
        response = client.post(
            "/api/recommendations/render",
            json={"document": DOCUMENT, "format": "rtf"},
        )
        assert response.status_code == 422
