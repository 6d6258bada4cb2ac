"""Shared plumbing for the session runners.

Every runner pushes records through its configured stages, counts
accept/reject per stage and collects rejection rows for
`rejections/rejections.jsonl`.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging
import os
import time

from ..pipeline.context import DocumentRecord
from ..records import Layout
from ..stages.base import Stage
from ..writers.base import RecordWriter

log = logging.getLogger("doc_categorization.runner")

def new_stage_counts(stages: List[Stage]) -> Dict[str, Dict[str, Any]]:
    return {st.name: {"in": 0, "acc": 0, "rej": 0, "rej_reasons": {}} for st in stages}

def rejection(
    file_id: str,
    stage: str,
    reason_code: str,
    reason_detail: str = "",
    *,
    layer: str = "runtime",
    source_file: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "file": file_id,
        "source_file": source_file,
        "stage": stage,
        "layer": layer,
        "decision": "reject",
        "reason_code": reason_code,
        "reason_detail": reason_detail,
        "ts_ms": int(time.time() * 1000),
    }

def runtime_rejection(file_id: str, exc: BaseException, *, source_file: Optional[str] = None) -> Dict[str, Any]:
    return rejection(file_id, "runtime_error", "RUNTIME_ERROR", str(exc), source_file=source_file)

def run_stages(
    record: DocumentRecord,
    stages: List[Stage],
    stage_counts: Dict[str, Dict[str, Any]],
    *,
    file_id: str,
    source_file: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Apply stages in order; return a rejection row on the first reject."""
    for st in stages:
        c = stage_counts[st.name]
        c["in"] += 1
        d = st.apply(record)
        if not d.accepted:
            c["rej"] += 1
            rc = d.reason_code or "REJECT"
            c["rej_reasons"][rc] = c["rej_reasons"].get(rc, 0) + 1
            log.debug(f"Rejected {file_id}: stage={st.name} reason={rc} detail={d.reason_detail}")
            return rejection(file_id, st.name, rc, d.reason_detail, layer=st.layer, source_file=source_file)
        c["acc"] += 1
    return None

def read_records(writer: RecordWriter, path: str, layout: Layout) -> List[DocumentRecord]:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Input file not found: {path}. Run the previous stage of this session first")
    records = writer.read(path, layout=layout)
    log.info(f"Read {len(records)} {layout.value} records from {path}")
    return records

def sort_records(records: List[DocumentRecord]) -> List[DocumentRecord]:
    return sorted(records, key=lambda r: r.file)
