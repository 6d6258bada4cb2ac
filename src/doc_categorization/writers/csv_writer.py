from __future__ import annotations
import os
from typing import Iterable, List
from .base import RecordWriter
from ..pipeline.context import DocumentRecord
from ..records import Layout, format_header, format_row, parse_rows

class CSVRecordWriter(RecordWriter):
    name = "csv"
    suffix = ".csv"

    def write(self, records: Iterable[DocumentRecord], *, path: str, layout: Layout) -> str:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        # newline="" keeps the CRLF terminators exactly as formatted
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(format_header(layout))
            for r in records:
                f.write(format_row(r, layout))
        return path

    def read(self, path: str, *, layout: Layout) -> List[DocumentRecord]:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return parse_rows(f.read(), layout)
