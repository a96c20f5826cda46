"""Markup parsers producing the node tree consumed by the entry splitter.

Two upstream representations are supported:

- Markdown, parsed by a small line-based block parser plus an inline
  tokenizer. It only understands the constructs recommendation answers use
  (lists, block quotes, headings, paragraphs, emphasis, links, code) and is
  lenient about indentation, because model output rarely indents list
  continuation lines consistently.
- HTML (e.g. Markdown already rendered upstream), converted with
  BeautifulSoup.

Neither parser raises on document content.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from garagescout.pipeline_config import MarkupFormat
from garagescout.recommendations.models import Node, NodeKind

# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------

_BULLET_RE = re.compile(r"^( {0,3})([*+-]|\d{1,9}[.)])(?:[ \t]+(.*))?$")
_QUOTE_RE = re.compile(r"^ {0,3}>[ ]?(.*)$")
_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_FENCE_RE = re.compile(r"^\s*```[\w-]*\s*\n(.*?)\n\s*```\s*$", re.DOTALL)

_INLINE_RE = re.compile(
    r"\\(?P<escaped>[!-/:-@\[-`{-~])"
    r"|(?P<ticks>`+)(?P<code>.+?)(?P=ticks)"
    r"|\*\*(?P<strong_a>.+?)\*\*"
    r"|(?<!\w)__(?P<strong_u>.+?)__(?!\w)"
    r"|\[(?P<link_text>[^\]]*)\]\((?P<link_href>[^)\s]*)(?:\s+\"[^\"]*\")?\)"
    r"|<(?P<autolink>(?:https?|mailto|tel):[^>\s]+)>"
    r"|(?P<bare_url>(?:https?://|www\.)[^\s<>]+|[\w-]+(?:\.[\w-]+)+/[^\s<>]*)"
    r"|\*(?P<em_a>[^\s*](?:[^*]*[^\s*])?)\*"
    r"|(?<!\w)_(?P<em_u>[^\s_](?:[^_]*[^\s_])?)_(?!\w)"
)


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _dedent(line: str, width: int) -> str:
    return line[min(width, _indent(line)) :]


def _starts_block(line: str) -> bool:
    return bool(_BULLET_RE.match(line) or _QUOTE_RE.match(line) or _HEADING_RE.match(line))


def parse_inline(text: str) -> tuple[Node, ...]:
    """Tokenize inline Markdown into text, emphasis, link and code nodes."""
    nodes: list[Node] = []
    pos = 0

    for match in _INLINE_RE.finditer(text):
        if match.start() > pos:
            nodes.append(Node(NodeKind.TEXT, text=text[pos : match.start()]))

        groups = match.groupdict()
        if groups["escaped"] is not None:
            nodes.append(Node(NodeKind.TEXT, text=groups["escaped"]))
        elif groups["bare_url"] is not None:
            # Literal; "_" and "*" in paths are not emphasis.
            nodes.append(Node(NodeKind.TEXT, text=groups["bare_url"]))
        elif groups["code"] is not None:
            nodes.append(Node(NodeKind.CODE, (Node(NodeKind.TEXT, text=groups["code"]),)))
        elif groups["strong_a"] is not None or groups["strong_u"] is not None:
            body = groups["strong_a"] if groups["strong_a"] is not None else groups["strong_u"]
            nodes.append(Node(NodeKind.STRONG, parse_inline(body)))
        elif groups["link_text"] is not None:
            nodes.append(
                Node(NodeKind.LINK, parse_inline(groups["link_text"]), href=groups["link_href"])
            )
        elif groups["autolink"] is not None:
            url = groups["autolink"]
            nodes.append(Node(NodeKind.LINK, (Node(NodeKind.TEXT, text=url),), href=url))
        else:
            body = groups["em_a"] if groups["em_a"] is not None else groups["em_u"]
            nodes.append(Node(NodeKind.EMPHASIS, parse_inline(body or "")))

        pos = match.end()

    if pos < len(text):
        nodes.append(Node(NodeKind.TEXT, text=text[pos:]))

    return tuple(nodes)


def _collect_item(
    lines: list[str], start: int, match: re.Match[str], base_indent: int
) -> tuple[list[str], int]:
    """Gather the content lines of one list item starting at *start*.

    Indented lines belong to the item. Unindented lines directly following
    item content are lazy continuations (``> ...`` right under ``* Title``);
    after a blank line only indented lines are still absorbed.
    """
    content_indent = len(match.group(1)) + len(match.group(2)) + 1
    body = [match.group(3) or ""]
    blank_pending = False

    i = start + 1
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            body.append("")
            blank_pending = True
            i += 1
            continue

        indent = _indent(line)
        if _BULLET_RE.match(line) and indent <= base_indent + 1:
            break
        if indent > base_indent:
            body.append(_dedent(line, content_indent))
        elif _HEADING_RE.match(line):
            break
        elif blank_pending:
            break
        else:
            body.append(line.lstrip(" "))

        blank_pending = False
        i += 1

    return body, i


def _parse_list(lines: list[str], start: int) -> tuple[Node, int]:
    base_indent = _indent(lines[start])
    items: list[Node] = []

    i = start
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue
        match = _BULLET_RE.match(line)
        if match is None or _indent(line) > base_indent + 1:
            break
        body, i = _collect_item(lines, i, match, base_indent)
        items.append(Node(NodeKind.ITEM, _parse_blocks(body)))

    return Node(NodeKind.LIST, tuple(items)), i


def _parse_quote(lines: list[str], start: int) -> tuple[Node, int]:
    """Collect a block quote, including lazy paragraph continuation lines.

    An unprefixed line directly after quoted paragraph text continues that
    paragraph, so ``>`` lines after a wrapped sentence stay in the same quote.
    """
    inner: list[str] = []
    in_paragraph = False

    i = start
    while i < len(lines):
        line = lines[i]
        match = _QUOTE_RE.match(line)
        if match is not None:
            content = match.group(1)
            inner.append(content)
            in_paragraph = bool(content.strip()) and not _starts_block(content)
        elif in_paragraph and line.strip() and not _starts_block(line):
            inner.append(line.strip())
        else:
            break
        i += 1

    return Node(NodeKind.BLOCKQUOTE, _parse_blocks(inner)), i


def _parse_blocks(lines: list[str]) -> tuple[Node, ...]:
    blocks: list[Node] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue

        if _BULLET_RE.match(line):
            node, i = _parse_list(lines, i)
            blocks.append(node)
            continue

        if _QUOTE_RE.match(line):
            node, i = _parse_quote(lines, i)
            blocks.append(node)
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            blocks.append(Node(NodeKind.HEADING, parse_inline(heading.group(2) or "")))
            i += 1
            continue

        # Paragraph: runs until a blank line or the start of another block.
        para_lines = [line.strip()]
        i += 1
        while i < len(lines) and lines[i].strip() and not _starts_block(lines[i]):
            para_lines.append(lines[i].strip())
            i += 1
        blocks.append(Node(NodeKind.PARAGRAPH, parse_inline("\n".join(para_lines))))

    return tuple(blocks)


def parse_markdown(content: str) -> Node:
    """Parse a Markdown document into a node tree.

    A document wrapped entirely in a code fence (a common model habit) is
    unwrapped first.
    """
    text = content.replace("\r\n", "\n").replace("\r", "\n")
    fence = _FENCE_RE.match(text)
    if fence:
        text = fence.group(1)

    lines = [line.expandtabs(4) for line in text.split("\n")]
    return Node(NodeKind.DOCUMENT, _parse_blocks(lines))


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

_TAG_KINDS: dict[str, NodeKind] = {
    "ul": NodeKind.LIST,
    "ol": NodeKind.LIST,
    "li": NodeKind.ITEM,
    "blockquote": NodeKind.BLOCKQUOTE,
    "p": NodeKind.PARAGRAPH,
    "h1": NodeKind.HEADING,
    "h2": NodeKind.HEADING,
    "h3": NodeKind.HEADING,
    "h4": NodeKind.HEADING,
    "h5": NodeKind.HEADING,
    "h6": NodeKind.HEADING,
    "strong": NodeKind.STRONG,
    "b": NodeKind.STRONG,
    "em": NodeKind.EMPHASIS,
    "i": NodeKind.EMPHASIS,
    "a": NodeKind.LINK,
    "code": NodeKind.CODE,
    "br": NodeKind.BREAK,
    "div": NodeKind.BLOCK,
    "section": NodeKind.BLOCK,
    "article": NodeKind.BLOCK,
    "main": NodeKind.BLOCK,
    "body": NodeKind.BLOCK,
    "html": NodeKind.BLOCK,
    "pre": NodeKind.BLOCK,
}

_SKIPPED_TAGS = frozenset({"head", "script", "style", "template"})


def _convert_html(element: object, in_block: bool) -> Node | None:
    if isinstance(element, Comment):
        return None

    if isinstance(element, NavigableString):
        text = str(element)
        if text.strip():
            return Node(NodeKind.TEXT, text=text)
        # Whitespace between inline elements still separates words.
        return None if in_block else Node(NodeKind.TEXT, text=" ")

    if not isinstance(element, Tag):
        return None

    name = (element.name or "").lower()
    if name in _SKIPPED_TAGS:
        return None

    kind = _TAG_KINDS.get(name, NodeKind.ELEMENT)
    if kind is NodeKind.BREAK:
        return Node(NodeKind.BREAK)

    is_container = kind in (NodeKind.LIST, NodeKind.BLOCKQUOTE, NodeKind.BLOCK)
    children = tuple(
        node
        for node in (_convert_html(child, is_container) for child in element.children)
        if node is not None
    )

    href = element.get("href") if kind is NodeKind.LINK else None
    return Node(kind, children, href=href if isinstance(href, str) else None)


def parse_html(content: str) -> Node:
    """Convert an HTML fragment into a node tree."""
    soup = BeautifulSoup(content, "html.parser")
    children = tuple(
        node
        for node in (_convert_html(child, True) for child in soup.children)
        if node is not None
    )
    return Node(NodeKind.DOCUMENT, children)


def parse_document(content: str, format: str | MarkupFormat) -> Node:
    """Dispatch to the correct parser based on *format*.

    Args:
        content: Raw document text.
        format: ``"markdown"`` / ``"md"`` or ``"html"``. The flat ``"text"``
                format has no tree; use the flat-text splitter for it.

    Returns:
        The document node tree.

    Raises:
        ValueError: If *format* is not a tree-producing format.
    """
    dispatch: dict[str, Callable[[str], Node]] = {
        "markdown": parse_markdown,
        "md": parse_markdown,
        "html": parse_html,
    }

    key = format.value if isinstance(format, MarkupFormat) else format
    parser = dispatch.get(key)
    if parser is None:
        msg = f"Unknown markup format: {format!r}. Supported: {list(dispatch.keys())}"
        raise ValueError(msg)

    return parser(content)
