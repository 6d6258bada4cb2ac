"""Writer registry.

Add new record formats without changing pipeline code by registering them
here or at runtime with `register_record_writer`.
"""

from __future__ import annotations
from typing import Dict
from .base import RecordWriter
from .csv_writer import CSVRecordWriter
from .parquet import ParquetRecordWriter

_WRITERS: Dict[str, RecordWriter] = {
    "csv": CSVRecordWriter(),
    "parquet": ParquetRecordWriter(),
}

def register_record_writer(name: str, writer: RecordWriter) -> None:
    if name in _WRITERS:
        raise ValueError(f"Record writer '{name}' already registered")
    _WRITERS[name] = writer

def list_record_writers() -> list[str]:
    return list(_WRITERS.keys())

def get_record_writer(name: str) -> RecordWriter:
    if name not in _WRITERS:
        raise KeyError(
            f"Unknown record writer: {name}. "
            f"Available: {list(_WRITERS)}. "
            f"Register with register_record_writer()"
        )
    return _WRITERS[name]
