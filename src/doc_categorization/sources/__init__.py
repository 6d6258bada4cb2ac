"""Document sources."""

from .base import DataSource, RawDocument
from .markdown_repo import MarkdownRepoSource, make_file_id, unique_file_id

__all__ = ["DataSource", "RawDocument", "MarkdownRepoSource", "make_file_id", "unique_file_id"]
