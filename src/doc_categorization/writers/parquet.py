from __future__ import annotations
import os
from typing import Iterable, List
import pyarrow as pa
import pyarrow.parquet as pq
from .base import RecordWriter
from ..pipeline.context import DocumentRecord
from ..records import Layout, NUMERIC_COLUMNS, record_from_values, record_values

def records_schema(layout: Layout) -> pa.Schema:
    return pa.schema(
        [(c, pa.int64() if c in NUMERIC_COLUMNS else pa.string()) for c in layout.columns],
        metadata={"layout": layout.value},
    )

class ParquetRecordWriter(RecordWriter):
    name = "parquet"
    suffix = ".parquet"

    def write(self, records: Iterable[DocumentRecord], *, path: str, layout: Layout) -> str:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        rows = [record_values(r, layout) for r in records]
        table = pa.Table.from_pylist(rows, schema=records_schema(layout))
        pq.write_table(table, path, compression="zstd")
        return path

    def read(self, path: str, *, layout: Layout) -> List[DocumentRecord]:
        table = pq.read_table(path)
        missing = [c for c in layout.columns if c not in table.column_names]
        if missing:
            raise ValueError(f"Missing {layout.value} columns in {path}: {missing}")
        return [record_from_values(row, layout) for row in table.to_pylist()]
