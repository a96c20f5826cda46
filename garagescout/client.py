"""HTTP client wrapper for the Garage Scout FastAPI backend."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from garagescout.config import settings

logger = logging.getLogger(__name__)


def check_health(api_url: str | None = None) -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{api_url or settings.api_url}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def render_recommendations(
    document: str,
    format: str | None = None,
    map_link_mode: str | None = None,
    grounding_chunks: list[dict[str, Any]] | None = None,
    api_url: str | None = None,
) -> dict[str, Any]:
    """Send a producer answer to the render endpoint.

    Returns the decoded response body, or an empty dict when the request
    fails (the failure is logged).
    """
    payload: dict[str, Any] = {"document": document}
    if format:
        payload["format"] = format
    if map_link_mode:
        payload["map_link_mode"] = map_link_mode
    if grounding_chunks:
        payload["grounding_chunks"] = grounding_chunks

    try:
        r = httpx.post(
            f"{api_url or settings.api_url}/api/recommendations/render",
            json=payload,
            timeout=30.0,
        )
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        logger.warning("Render request failed: %s", e)
        return {}
