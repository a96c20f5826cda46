"""Tests for the httpx API client wrapper (no live server required)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx

from garagescout.client import check_health, render_recommendations


class TestCheckHealth:
    @patch("garagescout.client.httpx.get")
    def test_healthy(self, mock_get: MagicMock) -> None:
        mock_get.return_value = MagicMock(status_code=200)
        assert check_health("http://api.test") is True
        mock_get.assert_called_once_with("http://api.test/health", timeout=5.0)

    @patch("garagescout.client.httpx.get", side_effect=httpx.ConnectError("refused"))
    def test_unreachable(self, mock_get: MagicMock) -> None:
        assert check_health("http://api.test") is False


class TestRenderRecommendations:
    @patch("garagescout.client.httpx.post")
    def test_posts_document(self, mock_post: MagicMock) -> None:
        response = MagicMock()
        response.json.return_value = {"item_count": 0, "items": [], "sources": []}
        mock_post.return_value = response

        result = render_recommendations("* A", format="markdown", api_url="http://api.test")

        assert result["item_count"] == 0
        call = mock_post.call_args
        assert call.args[0] == "http://api.test/api/recommendations/render"
        assert call.kwargs["json"] == {"document": "* A", "format": "markdown"}

    @patch("garagescout.client.httpx.post")
    def test_optional_fields_sent_when_given(self, mock_post: MagicMock) -> None:
        mock_post.return_value = MagicMock()
        chunks = [{"web": {"uri": "https://a.example", "title": "A"}}]

        render_recommendations(
            "* A", map_link_mode="direct", grounding_chunks=chunks, api_url="http://api.test"
        )

        payload = mock_post.call_args.kwargs["json"]
        assert payload["map_link_mode"] == "direct"
        assert payload["grounding_chunks"] == chunks

    @patch("garagescout.client.httpx.post")
    def test_format_omitted_by_default(self, mock_post: MagicMock) -> None:
        """Without an explicit format the server's configured default applies."""
        mock_post.return_value = MagicMock()

        render_recommendations("* A", api_url="http://api.test")

        assert mock_post.call_args.kwargs["json"] == {"document": "* A"}

    @patch("garagescout.client.httpx.post")
    def test_http_error_returns_empty(self, mock_post: MagicMock) -> None:
        request = httpx.Request("POST", "http://api.test/api/recommendations/render")
        failed = httpx.Response(400, request=request)
        mock_post.return_value = failed

        assert render_recommendations("  ", api_url="http://api.test") == {}
