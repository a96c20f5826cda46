"""Entry splitter: document tree (or flat text) -> ordered raw items."""

from __future__ import annotations

import re

from garagescout.recommendations.models import Node, NodeKind, RawItem

_BULLET_LINE_RE = re.compile(r"^\s*(?:[*+-]|\d{1,9}[.)])\s+")


def _top_level_lists(node: Node) -> list[Node]:
    """Lists in document order that are not nested inside another list item."""
    if node.kind is NodeKind.LIST:
        return [node]
    if node.kind is NodeKind.ITEM:
        return []

    lists: list[Node] = []
    for child in node.children:
        lists.extend(_top_level_lists(child))
    return lists


def split(document: Node) -> tuple[RawItem, ...]:
    """Split a parsed document into raw items.

    Items of every top-level list are returned in document order with
    zero-based ordinals across the whole document. No reordering happens
    here; ranking is the producer's job.
    """
    items: list[RawItem] = []
    for list_node in _top_level_lists(document):
        for child in list_node.children:
            if child.kind is not NodeKind.ITEM:
                continue
            items.append(RawItem(ordinal_index=len(items), raw_children=child.children))
    return tuple(items)


def split_segments(
    item: RawItem,
) -> tuple[tuple[Node, ...], Node | None, tuple[Node, ...]]:
    """Separate an item into title segment, fields segment and trailing nodes.

    The first block quote child is the fields segment and everything before it
    is the title segment. Children after it, further block quotes included,
    are returned untouched as trailing content. An item without a block quote
    has no fields segment.
    """
    children = item.raw_children
    for index, child in enumerate(children):
        if child.kind is NodeKind.BLOCKQUOTE:
            return children[:index], child, children[index + 1 :]
    return children, None, ()


def split_text(document: str) -> tuple[RawItem, ...]:
    """Flat-text fallback for producers whose output has no node tree.

    Each line starting with a list bullet opens a new item that runs until the
    next bullet line. Text before the first bullet is preamble and dropped. A
    document with no bullet lines at all becomes a single item.
    """
    lines = document.replace("\r\n", "\n").replace("\r", "\n").split("\n")

    chunks: list[list[str]] = []
    for line in lines:
        bullet = _BULLET_LINE_RE.match(line)
        if bullet:
            chunks.append([line[bullet.end() :]])
        elif chunks:
            chunks[-1].append(line)

    if not chunks:
        if not document.strip():
            return ()
        return (RawItem(ordinal_index=0, raw_text=document),)

    return tuple(
        RawItem(ordinal_index=index, raw_text="\n".join(chunk))
        for index, chunk in enumerate(chunks)
    )
