"""Categorize run: training records -> labeled records + category summary.

The trainer assigns a cluster id and centroid distances to every record.
Each labeled record then feeds its category's word matrix (top keywords as
words, title as a title phrase), and every category gets a synthesized
title. The summary lists, per category id ascending:

    Category <id>: <title>
    \t<member title>      (sorted)
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from ..config import LABELED_TABLE, TRAINING_TABLE, resolve_paths, section
from ..engines.trainer import ClusterTrainer, KMeansClusterTrainer
from ..records import Layout
from ..stages.registry import make_stages
from ..storage.writer import append_jsonl, write_category_summary, write_manifest
from ..words.matrix import CategoryMatrix
from ..writers.registry import get_record_writer
from .context import DocumentRecord
from .runner import new_stage_counts, read_records, run_stages, sort_records

log = logging.getLogger("doc_categorization.categorize")

DEFAULT_CLUSTERS = 8

def summary_lines(matrix: CategoryMatrix, records: List[DocumentRecord]) -> List[str]:
    lines: List[str] = []
    for category in matrix.categories():
        lines.append(f"Category {category}: {matrix.title(category)}")
        members = sorted(r.title for r in records if r.predicted_label == category)
        lines.extend(f"\t{title}" for title in members)
    return lines

def categorize(cfg: Dict[str, Any], trainer: Optional[ClusterTrainer] = None) -> Dict[str, Any]:
    paths = resolve_paths(cfg)
    cat_cfg = section(cfg, "categorize")
    writer = get_record_writer(section(cfg, "output").get("format", "csv"))
    records = read_records(writer, paths.table(TRAINING_TABLE, writer.suffix), Layout.TRAINING)

    gate = make_stages(["title_gate"])
    stage_counts = new_stage_counts(gate)
    valid: List[DocumentRecord] = []
    rejs: List[dict] = []
    for record in records:
        rej = run_stages(record, gate, stage_counts, file_id=record.file)
        if rej is not None:
            rejs.append(rej)
        else:
            valid.append(record)

    clusters = int(cat_cfg.get("clusters", DEFAULT_CLUSTERS))
    trainer = trainer or KMeansClusterTrainer(
        seed=int(cat_cfg.get("seed", 0)),
        max_iter=int(cat_cfg.get("max_iter", 300)),
    )
    log.info(f"Starting categorize records={len(valid)} clusters={clusters}")
    assignments = trainer.fit_predict(valid, clusters)
    if len(assignments) != len(valid):
        raise ValueError(f"Trainer returned {len(assignments)} assignments for {len(valid)} records")

    matrix = CategoryMatrix()
    for record, assignment in zip(valid, assignments):
        record.predicted_label = assignment.label
        record.score = assignment.distances
        matrix.add(assignment.label, record.top_words, record.title)

    labeled = sort_records(valid)
    out_path = writer.write(labeled, path=paths.table(LABELED_TABLE, writer.suffix), layout=Layout.LABELED)
    write_category_summary(paths.summary, summary_lines(matrix, labeled))
    if rejs:
        append_jsonl(paths.rejections, rejs)

    titles = {str(c): matrix.title(c) for c in matrix.categories()}
    for c, title in titles.items():
        log.info(f"Category {c}: {title}")

    manifest = {
        "run_id": paths.run_id,
        "stage": "categorize",
        "clusters": clusters,
        "total_processed_docs": len(records),
        "total_written_docs": len(labeled),
        "total_rejected_docs": len(rejs),
        "categories": titles,
        "outputs": {"records": out_path, "summary": paths.summary, "rejections": paths.rejections},
    }
    write_manifest(paths.manifest("categorize"), manifest)
    log.info(f"Categorize complete: written={len(labeled)} categories={len(titles)} output={out_path}")
    return manifest
