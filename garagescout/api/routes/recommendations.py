"""Recommendation endpoint: decode a producer answer into render-ready cards."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from garagescout.api.models import (
    ActionResponse,
    RecommendationCard,
    RenderRequest,
    RenderResponse,
    SourceCardResponse,
)
from garagescout.config import settings
from garagescout.pipeline_config import PipelineConfig
from garagescout.recommendations.grounding import parse_grounding_chunks
from garagescout.recommendations.pipeline import render_document

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/recommendations/render", response_model=RenderResponse)
async def render_recommendations(request: RenderRequest) -> RenderResponse:
    """Render a recommendation document into cards.

    An empty document means the upstream producer failed; it is reported as a
    400 so the client can show a retryable error instead of an empty list.
    """
    if not request.document.strip():
        raise HTTPException(status_code=400, detail="Recommendation document is empty")

    config = PipelineConfig(
        markup_format=request.format or settings.default_format,
        map_link_mode=request.map_link_mode or settings.default_map_link_mode,
        maps_search_url=settings.maps_search_url,
    )

    try:
        views = render_document(request.document, config)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    sources = parse_grounding_chunks(request.grounding_chunks)
    logger.info(
        "Rendered %d recommendation(s) and %d source(s) from %s input",
        len(views),
        len(sources),
        config.markup_format.value,
    )

    return RenderResponse(
        item_count=len(views),
        items=[
            RecommendationCard(
                key=v.key,
                title=v.title,
                rationale=v.rationale,
                is_top_choice=v.is_top_choice,
                expanded_by_default=v.expanded_by_default,
                has_details=v.has_details,
                address=v.address,
                actions=[ActionResponse(kind=a.kind, target=a.target) for a in v.actions],
            )
            for v in views
        ],
        sources=[
            SourceCardResponse(
                rank=s.rank,
                title=s.title,
                uri=s.uri,
                verified_by_maps=s.verified_by_maps,
                review_snippet=s.review_snippet,
            )
            for s in sources
        ],
    )
