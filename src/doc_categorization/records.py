"""Tabular record layouts.

Three layouts share the File/Title/Subtitle1..5 prefix:

- intermediate: ... Words                       (parse -> words)
- training:     ... Top20Words, WordCount, ReadingTime, Words   (words -> categorize)
- labeled:      ... WordCount, ReadingTime, Top20Words, PredictedLabel

CSV form: header first, every string field double-quoted (embedded quotes
doubled), numeric fields bare, CRLF line endings. In the labeled layout,
values that arrive already wrapped in quotes are unwrapped first so they
are never quoted twice.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple
import csv
import io

from .pipeline.context import DocumentRecord, SLATE_SIZE

SLATE_COLUMNS = ["Title"] + [f"Subtitle{i}" for i in range(1, SLATE_SIZE)]
NUMERIC_COLUMNS = frozenset({"WordCount", "PredictedLabel"})


class Layout(str, Enum):
    INTERMEDIATE = "intermediate"
    TRAINING = "training"
    LABELED = "labeled"

    @property
    def columns(self) -> List[str]:
        return list(_COLUMNS[self])


_COLUMNS: Dict[Layout, Tuple[str, ...]] = {
    Layout.INTERMEDIATE: ("File", *SLATE_COLUMNS, "Words"),
    Layout.TRAINING: ("File", *SLATE_COLUMNS, "Top20Words", "WordCount", "ReadingTime", "Words"),
    Layout.LABELED: ("File", *SLATE_COLUMNS, "WordCount", "ReadingTime", "Top20Words", "PredictedLabel"),
}


def unquote(value: str) -> str:
    """Unwrap a value that is already a quoted CSV field."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1].replace('""', '"')
    return value


def record_values(record: DocumentRecord, layout: Layout) -> Dict[str, Any]:
    values: Dict[str, Any] = {"File": record.file}
    values.update(zip(SLATE_COLUMNS, record.slate()))
    values["Words"] = record.words
    values["Top20Words"] = record.top_words
    values["WordCount"] = int(record.word_count or 0)
    values["ReadingTime"] = record.reading_time
    values["PredictedLabel"] = int(record.predicted_label or 0)
    out = {}
    for col in layout.columns:
        v = values[col]
        if col not in NUMERIC_COLUMNS:
            v = "" if v is None else str(v)
            if layout is Layout.LABELED:
                v = unquote(v)
        out[col] = v
    return out


def _int(value: Any, default: int = 0) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return int(float(value))


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def record_from_values(values: Mapping[str, Any], layout: Layout) -> DocumentRecord:
    slate = [_str(values.get(col)) for col in SLATE_COLUMNS]
    while slate and not slate[-1]:
        slate.pop()
    record = DocumentRecord(file=_str(values.get("File")), headings=slate)
    columns = layout.columns
    if "Words" in columns:
        record.words = _str(values.get("Words"))
    if "Top20Words" in columns:
        record.top_words = _str(values.get("Top20Words"))
    if "WordCount" in columns:
        record.word_count = _int(values.get("WordCount"))
    if "ReadingTime" in columns:
        record.reading_time = _str(values.get("ReadingTime"))
    if "PredictedLabel" in columns:
        record.predicted_label = _int(values.get("PredictedLabel"))
    return record


def _csv_writer(buf: io.StringIO):
    return csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\r\n")


def format_header(layout: Layout) -> str:
    buf = io.StringIO()
    _csv_writer(buf).writerow(layout.columns)
    return buf.getvalue()


def format_row(record: DocumentRecord, layout: Layout) -> str:
    buf = io.StringIO()
    values = record_values(record, layout)
    _csv_writer(buf).writerow([values[c] for c in layout.columns])
    return buf.getvalue()


def parse_rows(text: str, layout: Layout) -> List[DocumentRecord]:
    """Parse CSV text (header first) in `layout` back into records."""
    reader = csv.DictReader(io.StringIO(text, newline=""))
    missing = [c for c in layout.columns if c not in (reader.fieldnames or [])]
    if reader.fieldnames and missing:
        raise ValueError(f"Missing {layout.value} columns: {missing}")
    return [record_from_values(row, layout) for row in reader]
