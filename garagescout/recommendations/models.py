"""Data models for the recommendation decode-and-render pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class NodeKind(StrEnum):
    """Node types produced by the upstream markup parsers."""

    DOCUMENT = "document"
    LIST = "list"
    ITEM = "item"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    BLOCK = "block"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    LINK = "link"
    CODE = "code"
    TEXT = "text"
    BREAK = "break"
    ELEMENT = "element"


BLOCK_KINDS: frozenset[NodeKind] = frozenset(
    {
        NodeKind.DOCUMENT,
        NodeKind.LIST,
        NodeKind.ITEM,
        NodeKind.PARAGRAPH,
        NodeKind.HEADING,
        NodeKind.BLOCKQUOTE,
        NodeKind.BLOCK,
    }
)


@dataclass(frozen=True)
class Node:
    """One node of a parsed document tree."""

    kind: NodeKind
    children: tuple[Node, ...] = ()
    text: str = ""
    href: str | None = None

    @property
    def is_block(self) -> bool:
        return self.kind in BLOCK_KINDS


@dataclass(frozen=True)
class RawItem:
    """A slice of the document representing one list entry.

    Structural items carry ``raw_children``; items produced by the flat-text
    fallback carry ``raw_text`` instead.
    """

    ordinal_index: int
    raw_children: tuple[Node, ...] = ()
    raw_text: str | None = None


@dataclass(frozen=True)
class FieldSet:
    """Tagged contact fields; each one is optional and independent."""

    address: str | None = None
    phone: str | None = None
    website: str | None = None
    map_link: str | None = None

    def present(self) -> dict[str, str]:
        """Return only the fields that were found."""
        values = {
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "map_link": self.map_link,
        }
        return {name: value for name, value in values.items() if value is not None}


@dataclass(frozen=True)
class DecodedItem:
    """A list entry after splitting and field decoding."""

    title: str
    rationale: str
    fields: FieldSet = field(default_factory=FieldSet)
    ordinal_index: int = 0
    has_details: bool = False

    @property
    def is_top_choice(self) -> bool:
        return self.ordinal_index == 0

    @property
    def expanded_by_default(self) -> bool:
        return self.is_top_choice


class ActionKind(StrEnum):
    """Affordances a card can offer."""

    CALL = "call"
    MAP = "map"
    WEBSITE = "website"


@dataclass(frozen=True)
class Action:
    """A single clickable action with its normalized target."""

    kind: ActionKind
    target: str


@dataclass(frozen=True)
class ViewModel:
    """Render-ready representation of one recommended business."""

    key: str
    title: str
    rationale: str
    is_top_choice: bool
    expanded_by_default: bool
    actions: tuple[Action, ...] = ()
    address: str | None = None
    has_details: bool = False
    ordinal_index: int = 0


@dataclass(frozen=True)
class SourceCard:
    """A grounding source returned alongside the model's answer."""

    rank: int  # 1-based
    title: str
    uri: str
    verified_by_maps: bool = False
    review_snippet: str | None = None
