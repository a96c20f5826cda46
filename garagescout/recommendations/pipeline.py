"""End-to-end render pipeline: document -> split -> decode -> adapt."""

from __future__ import annotations

import logging

from garagescout.pipeline_config import MarkupFormat, PipelineConfig
from garagescout.recommendations.adapter import adapt
from garagescout.recommendations.decoder import decode_item
from garagescout.recommendations.markup import parse_document
from garagescout.recommendations.models import DecodedItem, RawItem, ViewModel
from garagescout.recommendations.splitter import split, split_text

logger = logging.getLogger(__name__)


def split_document(document: str, config: PipelineConfig | None = None) -> tuple[RawItem, ...]:
    """Split *document* using the structural parser or the flat-text fallback."""
    config = config or PipelineConfig()
    if config.markup_format is MarkupFormat.TEXT:
        return split_text(document)
    return split(parse_document(document, config.markup_format))


def decode_document(
    document: str, config: PipelineConfig | None = None
) -> tuple[DecodedItem, ...]:
    """Split and decode every item of *document*."""
    return tuple(decode_item(item) for item in split_document(document, config))


def render_document(document: str, config: PipelineConfig | None = None) -> tuple[ViewModel, ...]:
    """Full pipeline: parse -> split -> decode -> adapt.

    Pure and deterministic: the same document and config always produce equal
    view models. Never raises on document content.

    Args:
        document: Raw text returned by the recommendation producer.
        config: Markup format and link options; defaults to Markdown input with
            map-search links.

    Returns:
        One view model per list entry, in document order.
    """
    config = config or PipelineConfig()
    views = tuple(adapt(item, config) for item in decode_document(document, config))
    logger.debug(
        "Rendered %d item(s) from %d chars of %s",
        len(views),
        len(document),
        config.markup_format.value,
    )
    return views
