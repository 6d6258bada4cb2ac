"""Structural markdown parser.

Walks the document tree and produces:
- the word bag: every contributing text fragment, run through
  `extract_words`, concatenated and whitespace-normalized once
- heading candidates: heading text and the front-matter `title`

Contributing text: headings, paragraphs, list items, quotes, table cells,
link tooltips, autolink text and the front-matter title. Code spans never
contribute.

Parsing fails soft: empty or unparseable content yields a record with empty
`file` and no headings, which downstream stages drop.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List
import logging

from ..pipeline.context import DocumentRecord, HeadingCandidate
from ..text.normalize import extract_words, normalize_whitespace, title_trim
from .headings import select_headings
from .nodes import (
    Block, CodeSpan, FrontMatter, Heading, Hyperlink, Inline, Link, LinkReference,
    ListBlock, Paragraph, Quote, Styled, Table, TextRun, parse_blocks,
)

log = logging.getLogger("doc_categorization.markdown")

FRONT_MATTER_LEVEL = 0


@dataclass
class ParsedContent:
    words: str = ""
    candidates: List[HeadingCandidate] = field(default_factory=list)


class _Accumulator:
    """Owned by a single parse call; collects fragments and candidates."""

    def __init__(self):
        self.fragments: List[str] = []
        self.candidates: List[HeadingCandidate] = []

    def add_words(self, text) -> None:
        if text is None:
            return
        text = str(text)
        if text.strip():
            self.fragments.append(extract_words(text))

    def add_heading(self, level: int, text: str) -> None:
        trimmed = title_trim(text)
        if trimmed:
            self.candidates.append(HeadingCandidate(level, trimmed))

    def result(self) -> ParsedContent:
        return ParsedContent(normalize_whitespace("".join(self.fragments)), self.candidates)


class MarkdownParser:
    def collect(self, contents: str) -> ParsedContent:
        """Gather the word bag and heading candidates of a document."""
        acc = _Accumulator()
        for block in parse_blocks(contents):
            self._visit_block(block, acc)
        return acc.result()

    def parse(self, file_id: str, contents: str) -> DocumentRecord:
        """Parse one document. `file` is only set when the content parsed."""
        if not contents or contents.isspace():
            return DocumentRecord()
        try:
            parsed = self.collect(contents)
        except Exception as e:
            log.debug(f"Could not parse {file_id}: {e}")
            return DocumentRecord()
        return DocumentRecord(
            file=file_id,
            headings=select_headings(parsed.candidates),
            words=parsed.words,
        )

    def _visit_blocks(self, blocks: Iterable[Block], acc: _Accumulator) -> None:
        for block in blocks:
            self._visit_block(block, acc)

    def _visit_block(self, block: Block, acc: _Accumulator) -> None:
        if isinstance(block, Heading):
            first_run = next(
                (i.text for i in block.inlines if isinstance(i, TextRun) and i.text.strip()),
                None,
            )
            if first_run is not None:
                acc.add_heading(block.level, first_run)
            self._visit_inlines(block.inlines, acc)
        elif isinstance(block, Paragraph):
            self._visit_inlines(block.inlines, acc)
        elif isinstance(block, ListBlock):
            for item in block.items:
                self._visit_blocks(item, acc)
        elif isinstance(block, Quote):
            self._visit_blocks(block.blocks, acc)
        elif isinstance(block, Table):
            for row in block.rows:
                for cell in row:
                    self._visit_inlines(cell, acc)
        elif isinstance(block, LinkReference):
            acc.add_words(block.tooltip)
        elif isinstance(block, FrontMatter):
            title = block.fields.get("title")
            if title is not None and str(title).strip():
                acc.add_heading(FRONT_MATTER_LEVEL, str(title))
                acc.add_words(title)

    def _visit_inlines(self, inlines: Iterable[Inline], acc: _Accumulator) -> None:
        for inline in inlines:
            if isinstance(inline, TextRun):
                acc.add_words(inline.text)
            elif isinstance(inline, Link):
                acc.add_words(inline.tooltip)
                self._visit_inlines(inline.inlines, acc)
            elif isinstance(inline, Styled):
                self._visit_inlines(inline.inlines, acc)
            elif isinstance(inline, Hyperlink):
                acc.add_words(inline.text)
            elif isinstance(inline, CodeSpan):
                continue


_DEFAULT_PARSER = MarkdownParser()


def parse(file_id: str, raw_text: str) -> DocumentRecord:
    return _DEFAULT_PARSER.parse(file_id, raw_text)
