"""Grounding-source cards from the model's grounding metadata.

Each chunk is a mapping holding either ``maps`` or ``web`` data::

    {"maps": {"uri": "...", "title": "...",
              "placeAnswerSources": {"reviewSnippets": [{"content": "..."}]}}}
    {"web": {"uri": "...", "title": "..."}}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from garagescout.recommendations.models import SourceCard

logger = logging.getLogger(__name__)


def _first_review_snippet(maps: Mapping[str, Any]) -> str | None:
    sources = maps.get("placeAnswerSources")
    if not isinstance(sources, Mapping):
        return None
    snippets = sources.get("reviewSnippets")
    if not isinstance(snippets, list) or not snippets:
        return None
    first = snippets[0]
    if not isinstance(first, Mapping):
        return None
    content = first.get("content")
    if not isinstance(content, str) or not content.strip():
        return None
    return content.strip()


def parse_grounding_chunks(chunks: Iterable[Any] | None) -> tuple[SourceCard, ...]:
    """Convert grounding chunks into ranked source cards.

    ``maps`` data takes precedence over ``web`` data. Chunks without either,
    or without a URI, are skipped. Ranks are 1-based over the kept cards.
    """
    cards: list[SourceCard] = []

    for index, chunk in enumerate(chunks or []):
        if not isinstance(chunk, Mapping):
            logger.debug("Skipping grounding chunk %d: not a mapping", index)
            continue

        maps = chunk.get("maps")
        web = chunk.get("web")
        data = maps if isinstance(maps, Mapping) else web if isinstance(web, Mapping) else None
        if data is None:
            logger.debug("Skipping grounding chunk %d: no maps or web data", index)
            continue

        uri = data.get("uri")
        if not isinstance(uri, str) or not uri.strip():
            logger.debug("Skipping grounding chunk %d: missing uri", index)
            continue

        title = data.get("title")
        is_maps = data is maps
        cards.append(
            SourceCard(
                rank=len(cards) + 1,
                title=title.strip() if isinstance(title, str) else "",
                uri=uri.strip(),
                verified_by_maps=is_maps,
                review_snippet=_first_review_snippet(data) if is_maps else None,
            )
        )

    return tuple(cards)
