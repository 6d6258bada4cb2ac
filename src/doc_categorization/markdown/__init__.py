"""Markdown structure: node tree, parser and heading selection."""

from .headings import select_headings
from .parser import MarkdownParser, ParsedContent, parse

__all__ = ["MarkdownParser", "ParsedContent", "parse", "select_headings"]
