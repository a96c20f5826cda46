"""Pipeline configuration: markup/link enums and PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_MAPS_SEARCH_URL = "https://www.google.com/maps/search/"


class MarkupFormat(str, Enum):
    """Representations a recommendation document can arrive in."""

    MARKDOWN = "markdown"
    HTML = "html"
    TEXT = "text"


class MapLinkMode(str, Enum):
    """How a map field that is not already a URL becomes a link."""

    SEARCH = "search"  # wrap place text into a map-search query
    DIRECT = "direct"  # treat as a bare domain, prefix https://


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for the render pipeline.

    Defaults mirror the preferred behaviour: Markdown input and map-search
    links for place names.
    """

    markup_format: MarkupFormat = MarkupFormat.MARKDOWN
    map_link_mode: MapLinkMode = MapLinkMode.SEARCH
    maps_search_url: str = DEFAULT_MAPS_SEARCH_URL
