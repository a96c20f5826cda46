"""Pydantic request/response schemas for the Garage Scout API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from garagescout.pipeline_config import MapLinkMode, MarkupFormat
from garagescout.recommendations.models import ActionKind


class RenderRequest(BaseModel):
    """Request body for the /api/recommendations/render endpoint.

    ``format`` and ``map_link_mode`` fall back to the configured defaults.
    """

    document: str
    format: MarkupFormat | None = None
    map_link_mode: MapLinkMode | None = None
    grounding_chunks: list[dict[str, Any]] = []


class ActionResponse(BaseModel):
    """A card action (call / map / website) with its normalized target."""

    kind: ActionKind
    target: str


class RecommendationCard(BaseModel):
    """View model for one recommended business."""

    key: str
    title: str
    rationale: str
    is_top_choice: bool
    expanded_by_default: bool
    has_details: bool
    address: str | None = None
    actions: list[ActionResponse] = []


class SourceCardResponse(BaseModel):
    """A grounding source shown below the recommendations."""

    rank: int
    title: str
    uri: str
    verified_by_maps: bool = False
    review_snippet: str | None = None


class RenderResponse(BaseModel):
    """Response body for the /api/recommendations/render endpoint."""

    item_count: int
    items: list[RecommendationCard]
    sources: list[SourceCardResponse] = []
