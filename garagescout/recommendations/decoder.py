"""Tagged-field decoder: marker-glyph lines -> FieldSet plus rationale text.

Producers tag contact lines with a fixed set of emoji markers::

    > Great reviews, fair prices.
    >
    > 📍 123 Main St
    > 📞 555-1234
    > 🌐 joes-garage.example
    > 🗺️ https://maps.example/joe

Decoding is a single pass over lines driven by ``MARKERS``. It is total:
any text decodes to *some* rationale and field set, never an exception.
"""

from __future__ import annotations

import logging
import re

from garagescout.recommendations.models import DecodedItem, FieldSet, Node, NodeKind, RawItem
from garagescout.recommendations.splitter import split_segments

logger = logging.getLogger(__name__)

VARIATION_SELECTOR = "\ufe0f"

# Priority order matters: a line is assigned to the first marker it contains.
# The map marker is matched on its base code point so "🗺" and "🗺️" both work.
MARKERS: tuple[tuple[str, str], ...] = (
    ("address", "\U0001f4cd"),  # 📍
    ("phone", "\U0001f4de"),  # 📞
    ("website", "\U0001f310"),  # 🌐
    ("map_link", "\U0001f5fa"),  # 🗺
)

_QUOTE_PREFIX_RE = re.compile(r"^\s*(?:>\s?)+")
_BULLET_PREFIX_RE = re.compile(r"^\s*(?:[*+-]|\d{1,9}[.)])\s+")
_EMPHASIS_WRAP_RE = re.compile(r"^(\*\*|__)(.+)\1$")


def flatten(node: Node | None) -> str:
    """Concatenate the text leaves of *node* depth-first.

    A line break separates every pair of siblings where either one is a
    block-level node; inline siblings are joined directly.
    """
    if node is None:
        return ""
    if node.kind is NodeKind.TEXT:
        return node.text
    if node.kind is NodeKind.BREAK:
        return "\n"
    return flatten_nodes(node.children)


def flatten_nodes(nodes: tuple[Node, ...]) -> str:
    """Flatten a sequence of sibling nodes."""
    parts: list[str] = []
    prev_block = False
    for index, child in enumerate(nodes):
        if index and (prev_block or child.is_block):
            parts.append("\n")
        parts.append(flatten(child))
        prev_block = child.is_block
    return "".join(parts)


def _match_marker(line: str) -> tuple[str, str] | None:
    for field_name, glyph in MARKERS:
        if glyph in line:
            payload = line.rpartition(glyph)[2].lstrip(VARIATION_SELECTOR).strip()
            return field_name, payload
    return None


def scan_lines(lines: list[str]) -> tuple[str, FieldSet]:
    """Run the marker scanner over pre-split lines.

    Returns:
        ``(rationale, fields)``. The first non-empty payload for a field wins;
        later lines for the same field are dropped rather than merged or
        added to the rationale.
    """
    values: dict[str, str] = {}
    rationale: list[str] = []

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        matched = _match_marker(line)
        if matched is None:
            rationale.append(line)
            continue

        field_name, payload = matched
        if not payload:
            continue
        if field_name in values:
            logger.debug("Ignoring duplicate %s line: %r", field_name, line)
            continue
        values[field_name] = payload

    return "\n".join(rationale).strip(), FieldSet(**values)


def decode(fields_segment: Node | None) -> tuple[str, FieldSet]:
    """Decode a structural fields segment (a block quote node)."""
    if fields_segment is None:
        return "", FieldSet()
    return scan_lines(flatten(fields_segment).split("\n"))


def decode_text(text: str | None) -> tuple[str, FieldSet]:
    """Decode a flat text block; leading ``>`` quote markers are ignored."""
    if not text:
        return "", FieldSet()
    lines = [_QUOTE_PREFIX_RE.sub("", line) for line in text.splitlines()]
    return scan_lines(lines)


def _clean_title(line: str) -> str:
    title = line.strip()
    wrapped = _EMPHASIS_WRAP_RE.match(title)
    if wrapped:
        title = wrapped.group(2).strip()
    return title


def _non_blank(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def _join(*parts: str) -> str:
    return "\n".join(part for part in parts if part).strip()


def decode_item(item: RawItem) -> DecodedItem:
    """Split one raw item into title, rationale and fields.

    The title is the first line of the title segment; any further title-segment
    lines lead the rationale, followed by the decoded fields rationale and
    finally any content after the fields segment, which is kept as-is.
    """
    if item.raw_text is not None:
        return _decode_flat_item(item)

    title_nodes, fields_segment, trailing = split_segments(item)

    title_lines = _non_blank(flatten_nodes(title_nodes))
    title = title_lines[0] if title_lines else ""
    fields_rationale, fields = decode(fields_segment)

    return DecodedItem(
        title=title,
        rationale=_join(
            "\n".join(title_lines[1:]),
            fields_rationale,
            "\n".join(_non_blank(flatten_nodes(trailing))),
        ),
        fields=fields,
        ordinal_index=item.ordinal_index,
        has_details=fields_segment is not None,
    )


def _decode_flat_item(item: RawItem) -> DecodedItem:
    lines = [
        _BULLET_PREFIX_RE.sub("", _QUOTE_PREFIX_RE.sub("", line))
        for line in (item.raw_text or "").splitlines()
    ]
    lines = [line for line in lines if line.strip()]
    if not lines:
        return DecodedItem(title="", rationale="", ordinal_index=item.ordinal_index)

    title = _clean_title(lines[0])
    if _match_marker(title) is not None:
        # No title line at all: every line is body.
        title, body = "", lines
    else:
        body = lines[1:]

    rationale, fields = scan_lines(body)
    return DecodedItem(
        title=title,
        rationale=rationale,
        fields=fields,
        ordinal_index=item.ordinal_index,
        has_details=bool(body),
    )
