"""Record writers (CSV, Parquet) and their registry."""

from .base import RecordWriter
from .registry import get_record_writer, list_record_writers, register_record_writer

__all__ = ["RecordWriter", "get_record_writer", "list_record_writers", "register_record_writer"]
