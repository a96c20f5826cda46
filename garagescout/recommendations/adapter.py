"""Presentation adapter: decoded items -> render-ready view models."""

from __future__ import annotations

import hashlib
import re
from enum import StrEnum
from urllib.parse import quote

from garagescout.pipeline_config import DEFAULT_MAPS_SEARCH_URL, MapLinkMode, PipelineConfig
from garagescout.recommendations.models import (
    Action,
    ActionKind,
    DecodedItem,
    FieldSet,
    ViewModel,
)

# Characters encodeURIComponent leaves alone; keeps query URLs identical to
# the ones browsers build for the same text.
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Whitespace plus the tel-URI visual separators.
_PHONE_STRIP_RE = re.compile(r"[\s\-.()]")


class LinkType(StrEnum):
    WEB = "web"
    MAP = "map"


def maps_search_url(text: str, base_url: str = DEFAULT_MAPS_SEARCH_URL) -> str:
    """Build a map-search URL for free-form place text."""
    return f"{base_url}?api=1&query={quote(text, safe=_URI_COMPONENT_SAFE)}"


def safe_url(
    raw: str | None,
    link_type: LinkType = LinkType.WEB,
    mode: MapLinkMode = MapLinkMode.SEARCH,
    base_url: str = DEFAULT_MAPS_SEARCH_URL,
) -> str | None:
    """Make a producer-supplied link clickable.

    Deliberately naive: no DNS, scheme or encoding checks. Blank input yields
    ``None`` (no action). In search mode a map value that does not start with
    ``http`` or ``www`` is treated as place text and wrapped in a map search.
    """
    if not raw:
        return None
    url = raw.strip()
    if not url:
        return None

    if (
        link_type is LinkType.MAP
        and mode is MapLinkMode.SEARCH
        and not url.startswith(("http", "www"))
    ):
        return maps_search_url(url, base_url)

    if url.startswith("http"):
        return url
    return f"https://{url}"


def tel_target(phone: str | None) -> str | None:
    """``tel:`` target for a raw phone string, or ``None`` if blank."""
    if not phone:
        return None
    digits = _PHONE_STRIP_RE.sub("", phone)
    if not digits:
        return None
    return f"tel:{digits}"


def build_actions(fields: FieldSet, config: PipelineConfig | None = None) -> tuple[Action, ...]:
    """Ordered Call, Map, Website actions for the fields that are present."""
    config = config or PipelineConfig()
    actions: list[Action] = []

    call = tel_target(fields.phone)
    if call:
        actions.append(Action(ActionKind.CALL, call))

    map_target = safe_url(
        fields.map_link, LinkType.MAP, config.map_link_mode, config.maps_search_url
    )
    if map_target:
        actions.append(Action(ActionKind.MAP, map_target))

    website = safe_url(fields.website, LinkType.WEB)
    if website:
        actions.append(Action(ActionKind.WEBSITE, website))

    return tuple(actions)


def card_key(title: str, address: str | None, ordinal_index: int) -> str:
    """Stable identity for a card across re-renders.

    Hash of title and address; falls back to the ordinal when both are blank.
    """
    if not title and not address:
        return f"item-{ordinal_index}"
    digest = hashlib.sha1(f"{title}|{address or ''}".encode()).hexdigest()
    return digest[:16]


def adapt(item: DecodedItem, config: PipelineConfig | None = None) -> ViewModel:
    """Turn a decoded item into its view model."""
    return ViewModel(
        key=card_key(item.title, item.fields.address, item.ordinal_index),
        title=item.title,
        rationale=item.rationale,
        is_top_choice=item.is_top_choice,
        expanded_by_default=item.expanded_by_default,
        actions=build_actions(item.fields, config),
        address=item.fields.address,
        has_details=item.has_details,
        ordinal_index=item.ordinal_index,
    )
