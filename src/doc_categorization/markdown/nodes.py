"""Document tree used by the structural parser.

The parser only ever sees this small, closed set of node kinds. Conversion
from the markdown-it-py syntax tree (plus YAML front matter and link
reference definitions) happens here, so nothing else depends on the
library's token types.

Blocks:  FrontMatter, Heading, Paragraph, ListBlock, Quote, Table, LinkReference
Inlines: TextRun, Hyperlink, Link, Styled, CodeSpan

Node kinds without a counterpart (code blocks, html, rules, images) are
dropped during conversion.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import re

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

log = logging.getLogger("doc_categorization.markdown")

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


# inlines

@dataclass(frozen=True)
class TextRun:
    text: str


@dataclass(frozen=True)
class Hyperlink:
    """Bare or angle-bracket autolink; only its visible text matters."""
    text: str


@dataclass(frozen=True)
class Link:
    tooltip: Optional[str]
    inlines: Tuple["Inline", ...] = ()


@dataclass(frozen=True)
class Styled:
    """Emphasis, strong or strikethrough span."""
    inlines: Tuple["Inline", ...] = ()


@dataclass(frozen=True)
class CodeSpan:
    text: str


Inline = Union[TextRun, Hyperlink, Link, Styled, CodeSpan]


# blocks

@dataclass(frozen=True)
class FrontMatter:
    fields: Dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class Heading:
    level: int
    inlines: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Paragraph:
    inlines: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class ListBlock:
    items: Tuple[Tuple["Block", ...], ...] = ()


@dataclass(frozen=True)
class Quote:
    blocks: Tuple["Block", ...] = ()


@dataclass(frozen=True)
class Table:
    # rows -> cells -> inlines
    rows: Tuple[Tuple[Tuple[Inline, ...], ...], ...] = ()


@dataclass(frozen=True)
class LinkReference:
    tooltip: Optional[str]


Block = Union[FrontMatter, Heading, Paragraph, ListBlock, Quote, Table, LinkReference]


def _make_markdown() -> MarkdownIt:
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


_MD = _make_markdown()


def split_front_matter(text: str) -> Tuple[Optional[FrontMatter], str]:
    """Split a leading `---` YAML block from the body.

    Unreadable YAML is dropped rather than rendered as markdown.
    """
    text = text.lstrip("\ufeff")
    m = _FRONT_MATTER_RE.match(text)
    if not m:
        return None, text
    body = text[m.end():]
    try:
        data = yaml.safe_load(m.group(1))
    except yaml.YAMLError as e:
        log.debug(f"Ignoring unreadable front matter: {e}")
        return None, body
    if not isinstance(data, dict):
        return None, body
    return FrontMatter(fields={str(k): v for k, v in data.items()}), body


def convert_inlines(node: SyntaxTreeNode) -> Tuple[Inline, ...]:
    out: List[Inline] = []
    for child in node.children:
        converted = _convert_inline(child)
        if converted is not None:
            out.append(converted)
    return tuple(out)


def _convert_inline(node: SyntaxTreeNode) -> Optional[Inline]:
    kind = node.type
    if kind in ("text", "text_special"):
        return TextRun(node.content)
    if kind == "code_inline":
        return CodeSpan(node.content)
    if kind == "link":
        if node.markup == "autolink" or node.info == "auto":
            return Hyperlink("".join(c.content for c in node.children))
        title = node.attrs.get("title")
        return Link(str(title) if title is not None else None, convert_inlines(node))
    if kind in ("em", "strong", "s"):
        return Styled(convert_inlines(node))
    # softbreak, hardbreak, image, html_inline
    return None


def _inline_child(node: SyntaxTreeNode) -> Tuple[Inline, ...]:
    for child in node.children:
        if child.type == "inline":
            return convert_inlines(child)
    return ()


def convert_block(node: SyntaxTreeNode) -> Optional[Block]:
    kind = node.type
    if kind == "heading":
        return Heading(int(node.tag[1:]), _inline_child(node))
    if kind == "paragraph":
        return Paragraph(_inline_child(node))
    if kind in ("bullet_list", "ordered_list"):
        items = []
        for item in node.children:
            items.append(tuple(b for b in (convert_block(c) for c in item.children) if b is not None))
        return ListBlock(tuple(items))
    if kind == "blockquote":
        return Quote(tuple(b for b in (convert_block(c) for c in node.children) if b is not None))
    if kind == "table":
        rows = []
        for section in node.children:
            for row in section.children:
                rows.append(tuple(_inline_child(cell) for cell in row.children))
        return Table(tuple(rows))
    # fence, code_block, html_block, hr
    return None


def _line(node: SyntaxTreeNode) -> int:
    return node.map[0] if node.map else 0


def parse_blocks(text: str) -> List[Block]:
    """Parse markdown text into the block list, in document order."""
    front, body = split_front_matter(text)
    env: Dict[str, Any] = {}
    tokens = _MD.parse(body, env)
    root = SyntaxTreeNode(tokens)

    positioned: List[Tuple[int, Block]] = []
    for child in root.children:
        block = convert_block(child)
        if block is not None:
            positioned.append((_line(child), block))

    for ref in (env.get("references") or {}).values():
        line = (ref.get("map") or [0])[0]
        positioned.append((line, LinkReference(ref.get("title") or None)))

    # stable: references land after blocks starting on the same line
    positioned.sort(key=lambda p: p[0])
    blocks = [b for _, b in positioned]
    if front is not None:
        blocks.insert(0, front)
    return blocks
