"""Parse run: markdown repository -> intermediate records.

Documents are parsed one by one (local), on a thread pool
(`parse.workers > 1`) or in Ray Data tasks (`execution.mode: ray`).
Parsing is pure, so completion order does not matter; valid records are
sorted by file identifier before the intermediate file is written.

A stop request (threading.Event) is honoured after the current document in
every mode; in-flight work of a pool or Ray chunk is dropped. Documents
already parsed are still written.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
import logging
import threading

from tqdm import tqdm

from ..config import INTERMEDIATE_TABLE, resolve_paths, section
from ..markdown.parser import parse
from ..records import Layout
from ..sources.base import RawDocument
from ..sources.markdown_repo import DEFAULT_EXTENSIONS, MarkdownRepoSource
from ..stages.registry import DEFAULT_PARSE_STAGES, make_stages
from ..storage.writer import append_jsonl, write_manifest, write_words_file
from ..writers.registry import get_record_writer
from .context import DocumentRecord
from .runner import new_stage_counts, run_stages, runtime_rejection, sort_records

log = logging.getLogger("doc_categorization.parse")

RAY_CHUNK = 1000


def _parse_raw(raw: RawDocument) -> DocumentRecord:
    return parse(raw.file_id, raw.text)


def _parse_row(row: Dict[str, Any]) -> Dict[str, Any]:
    record = parse(row["file_id"], row["text"])
    return {"file_id": row["file_id"], "file": record.file, "headings": list(record.headings), "words": record.words}


def _stop_requested(stop_event: Optional[threading.Event]) -> bool:
    if stop_event is not None and stop_event.is_set():
        log.warning("Stop requested; keeping documents parsed so far")
        return True
    return False


def _batches(
    docs: Iterable[RawDocument], size: int, stop_event: Optional[threading.Event]
) -> Iterator[List[RawDocument]]:
    batch: List[RawDocument] = []
    for raw in docs:
        if _stop_requested(stop_event):
            break
        batch.append(raw)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def _iter_parsed_ray(
    docs: Iterable[RawDocument], ray_cfg: Dict[str, Any], stop_event: Optional[threading.Event]
) -> Iterator[Tuple[RawDocument, DocumentRecord]]:
    import ray
    import ray.data

    ray.init(address=ray_cfg.get("address"), ignore_reinit_error=True)
    log.info("Ray initialized. Parsing in ray.data tasks")
    for batch in _batches(docs, int(ray_cfg.get("chunk", RAY_CHUNK)), stop_event):
        ds = ray.data.from_items([{"file_id": r.file_id, "text": r.text} for r in batch])
        rows = {row["file_id"]: row for row in ds.map(_parse_row).take_all()}
        for raw in batch:
            # the rest of a parsed chunk is discarded on stop
            if _stop_requested(stop_event):
                return
            row = rows[raw.file_id]
            yield raw, DocumentRecord(
                file=str(row["file"] or ""),
                headings=[str(h) for h in row["headings"]],
                words=str(row["words"] or ""),
            )


def _iter_parsed_threads(
    docs: Iterable[RawDocument], workers: int, stop_event: Optional[threading.Event]
) -> Iterator[Tuple[RawDocument, DocumentRecord]]:
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for batch in _batches(docs, workers * 4, stop_event):
            futures = [pool.submit(_parse_raw, raw) for raw in batch]
            for raw, future in zip(batch, futures):
                if _stop_requested(stop_event):
                    for f in futures:
                        f.cancel()
                    return
                yield raw, future.result()


def iter_parsed(
    docs: Iterable[RawDocument],
    *,
    workers: int = 1,
    mode: str = "local",
    ray_cfg: Optional[Dict[str, Any]] = None,
    stop_event: Optional[threading.Event] = None,
) -> Iterator[Tuple[RawDocument, DocumentRecord]]:
    """Yield (raw document, parsed record) pairs.

    The stop event is checked before every yielded document.
    """
    if mode == "ray":
        yield from _iter_parsed_ray(docs, ray_cfg or {}, stop_event)
    elif workers > 1:
        yield from _iter_parsed_threads(docs, workers, stop_event)
    else:
        for batch in _batches(docs, 1, stop_event):
            for raw in batch:
                yield raw, _parse_raw(raw)


def parse_repo(cfg: Dict[str, Any], *, stop_event: Optional[threading.Event] = None) -> Dict[str, Any]:
    paths = resolve_paths(cfg)
    source_cfg = section(cfg, "source")
    src = MarkdownRepoSource(
        source_cfg.get("repo"),
        extensions=source_cfg.get("extensions") or DEFAULT_EXTENSIONS,
    )
    stages = make_stages(section(cfg, "stages").get("parse", DEFAULT_PARSE_STAGES))
    writer = get_record_writer(section(cfg, "output").get("format", "csv"))
    execution = section(cfg, "execution")
    mode = str(execution.get("mode", "local")).lower()
    workers = int(section(cfg, "parse").get("workers", 1))

    src_metadata = src.metadata()
    total = int(src_metadata["file_count"])
    log.info(f"Starting parse repo={src_metadata['repo']} files={total} mode={mode} workers={workers}")

    stage_counts = new_stage_counts(stages)
    records: List[DocumentRecord] = []
    rejs: List[dict] = []
    processed = 0

    parsed = iter_parsed(
        src.stream(), workers=workers, mode=mode,
        ray_cfg=execution.get("ray") or {}, stop_event=stop_event,
    )
    for raw, record in tqdm(parsed, total=total, desc="parse", unit="doc"):
        processed += 1
        try:
            rej = run_stages(record, stages, stage_counts, file_id=raw.file_id, source_file=raw.path)
            if rej is not None:
                rejs.append(rej)
                continue
            write_words_file(paths.words_dir, record)
            records.append(record)
        except Exception as e:
            log.exception(f"Unhandled error while parsing file={raw.file_id}: {e}")
            rejs.append(runtime_rejection(raw.file_id, e, source_file=raw.path))

    out_path = writer.write(
        sort_records(records),
        path=paths.table(INTERMEDIATE_TABLE, writer.suffix),
        layout=Layout.INTERMEDIATE,
    )
    if rejs:
        append_jsonl(paths.rejections, rejs)

    stopped = stop_event is not None and stop_event.is_set()
    manifest = {
        "run_id": paths.run_id,
        "stage": "parse",
        "repo": src_metadata["repo"],
        "total_files": total,
        "total_processed_docs": processed,
        "total_written_docs": len(records),
        "total_rejected_docs": len(rejs),
        "stopped": stopped,
        "stage_counts": stage_counts,
        "outputs": {
            "records": out_path,
            "words_dir": paths.words_dir,
            "rejections": paths.rejections,
        },
    }
    write_manifest(paths.manifest("parse"), manifest)
    log.info(f"Parse complete: {len(records)} of {total} processed={processed} rejected={len(rejs)} output={out_path}")
    return manifest
