"""Example: adding a record format at runtime without modifying registry.py.

Registers a JSON Lines writer; select it with `output.format: jsonl`.
"""

from __future__ import annotations
import json
import os
from typing import Iterable, List

from doc_categorization.pipeline.context import DocumentRecord
from doc_categorization.records import Layout, record_from_values, record_values
from doc_categorization.writers.base import RecordWriter
from doc_categorization.writers.registry import list_record_writers, register_record_writer

class JSONLRecordWriter(RecordWriter):
    name = "jsonl"
    suffix = ".jsonl"

    def write(self, records: Iterable[DocumentRecord], *, path: str, layout: Layout) -> str:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for r in records:
                f.write(json.dumps(record_values(r, layout), ensure_ascii=False) + "\n")
        return path

    def read(self, path: str, *, layout: Layout) -> List[DocumentRecord]:
        with open(path, "r", encoding="utf-8") as f:
            return [record_from_values(json.loads(line), layout) for line in f if line.strip()]

register_record_writer("jsonl", JSONLRecordWriter())

print("Registered record writers:")
for name in list_record_writers():
    print(f"  {name}")
