"""Words run: intermediate records -> training records.

The corpus word-count engine produces per-document term counts, word
totals and document frequencies in one pass; the words stages then pick
the top keywords and the reading time for each record.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from tqdm import tqdm

from ..config import INTERMEDIATE_TABLE, TRAINING_TABLE, resolve_paths, section
from ..engines.word_count import PandasWordCountEngine, WordCountEngine
from ..records import Layout
from ..stages.registry import DEFAULT_WORDS_STAGES, make_stages
from ..storage.writer import append_jsonl, write_manifest
from ..text.stopwords import StopWordSet
from ..writers.registry import get_record_writer
from .context import DocumentRecord
from .runner import new_stage_counts, read_records, run_stages, runtime_rejection, sort_records

log = logging.getLogger("doc_categorization.words")

def process_words(
    cfg: Dict[str, Any],
    engine: Optional[WordCountEngine] = None,
    *,
    stopwords: Optional[StopWordSet] = None,
) -> Dict[str, Any]:
    paths = resolve_paths(cfg)
    words_cfg = section(cfg, "words")
    writer = get_record_writer(section(cfg, "output").get("format", "csv"))
    in_path = paths.table(INTERMEDIATE_TABLE, writer.suffix)
    records = read_records(writer, in_path, Layout.INTERMEDIATE)

    engine = engine or PandasWordCountEngine()
    counts = engine.count(records)
    stages = make_stages(
        section(cfg, "stages").get("words", DEFAULT_WORDS_STAGES),
        words_cfg,
        counts=counts,
        stopwords=stopwords,
    )

    stage_counts = new_stage_counts(stages)
    out: List[DocumentRecord] = []
    rejs: List[dict] = []
    for record in tqdm(records, desc="words", unit="doc"):
        file_id = record.file
        try:
            rej = run_stages(record, stages, stage_counts, file_id=file_id)
            if rej is not None:
                rejs.append(rej)
                continue
            out.append(record)
        except Exception as e:
            log.exception(f"Unhandled error while selecting words file={file_id}: {e}")
            rejs.append(runtime_rejection(file_id, e))

    out_path = writer.write(
        sort_records(out),
        path=paths.table(TRAINING_TABLE, writer.suffix),
        layout=Layout.TRAINING,
    )
    if rejs:
        append_jsonl(paths.rejections, rejs)

    manifest = {
        "run_id": paths.run_id,
        "stage": "words",
        "total_documents": counts.total_documents,
        "vocabulary": len(counts.document_frequency),
        "total_processed_docs": len(records),
        "total_written_docs": len(out),
        "total_rejected_docs": len(rejs),
        "stage_counts": stage_counts,
        "outputs": {"records": out_path, "rejections": paths.rejections},
    }
    write_manifest(paths.manifest("words"), manifest)
    log.info(f"Words complete: processed={len(records)} written={len(out)} rejected={len(rejs)} output={out_path}")
    return manifest
