import json
import os
import threading

import pytest

from doc_categorization.engines.trainer import ClusterAssignment
from doc_categorization.pipeline.categorize import categorize
from doc_categorization.pipeline.parse import iter_parsed, parse_repo
from doc_categorization.pipeline.words import process_words
from doc_categorization.records import Layout
from doc_categorization.sources.base import RawDocument
from doc_categorization.writers import get_record_writer


class KeywordTrainer:
    """Label 0 for install documents, 1 for the rest."""

    def fit_predict(self, records, clusters):
        out = []
        for r in records:
            label = 0 if "install" in r.top_words.split(" ") else 1
            out.append(ClusterAssignment(label, [float(label != c) for c in range(clusters)]))
        return out


def _read(path, layout):
    return get_record_writer("csv").read(path, layout=layout)


def test_parse_writes_sorted_valid_records(build_cfg):
    manifest = parse_repo(build_cfg)
    cache = build_cfg["run"]["cache_dir"]
    assert manifest["total_files"] == 5
    assert manifest["total_written_docs"] == 3
    assert manifest["total_rejected_docs"] == 2

    records = _read(os.path.join(cache, "docs-input.csv"), Layout.INTERMEDIATE)
    assert [r.file for r in records] == ["1-getting-started.md", "1-monitoring.md", "2-advanced-install.md"]
    assert records[1].headings == ["Monitoring Dashboards", "Metrics"]
    assert records[0].words == "Getting Started install install configure"

    with open(os.path.join(cache, "words", "2-advanced-install.md"), encoding="utf-8") as f:
        assert f.read() == "Advanced Install install configure deploy"

    with open(os.path.join(cache, "rejections", "rejections.jsonl"), encoding="utf-8") as f:
        rejections = {r["file"]: r["reason_code"] for r in map(json.loads, f)}
    assert rejections == {"1-empty.md": "FILE_MISSING", "1-short.md": "TITLE_MISSING"}
    with open(os.path.join(cache, "rejections", "rejections.jsonl"), encoding="utf-8") as f:
        short = [r for r in map(json.loads, f) if r["file"] == "1-short.md"][0]
    assert short["layer"] == "validation"
    assert short["source_file"].endswith("short.md")
    assert os.path.isfile(os.path.join(cache, "manifests", "test-parse.json"))


def test_parse_with_thread_pool_matches_sequential(build_cfg, tmp_path):
    parse_repo(build_cfg)
    pooled = dict(build_cfg, run={"run_id": "pooled", "cache_dir": str(tmp_path / "pooled")}, parse={"workers": 4})
    parse_repo(pooled)
    with open(os.path.join(build_cfg["run"]["cache_dir"], "docs-input.csv"), "rb") as a:
        with open(os.path.join(pooled["run"]["cache_dir"], "docs-input.csv"), "rb") as b:
            assert a.read() == b.read()


def test_stop_request_keeps_partial_output(build_cfg):
    stop = threading.Event()
    stop.set()
    manifest = parse_repo(build_cfg, stop_event=stop)
    assert manifest["stopped"] is True
    assert manifest["total_written_docs"] == 0
    assert _read(manifest["outputs"]["records"], Layout.INTERMEDIATE) == []


@pytest.mark.parametrize("workers", [1, 4])
def test_stop_request_ends_iteration_after_current_document(workers):
    docs = [RawDocument(file_id=f"1-d{i}.md", text="# Heading here", path=f"d{i}.md") for i in range(10)]
    stop = threading.Event()
    seen = []
    for raw, record in iter_parsed(docs, workers=workers, stop_event=stop):
        seen.append(record.file)
        stop.set()
    assert seen == ["1-d0.md"]


def test_words_selects_keywords_and_reading_time(build_cfg):
    parse_repo(build_cfg)
    manifest = process_words(build_cfg)
    assert manifest["total_written_docs"] == 3
    assert manifest["total_documents"] == 3

    records = _read(manifest["outputs"]["records"], Layout.TRAINING)
    advanced = records[2]
    assert advanced.title == "Advanced Install"
    # "install" appears twice but in two documents; "deploy" is unique to this one
    assert advanced.top_words == "install advanced deploy configure"
    assert advanced.word_count == 5
    assert advanced.reading_time == "< 1 minute"
    assert advanced.words == ""


def test_words_needs_parse_output(build_cfg):
    with pytest.raises(FileNotFoundError):
        process_words(build_cfg)


def test_categorize_writes_labels_and_summary(build_cfg):
    parse_repo(build_cfg)
    process_words(build_cfg)
    manifest = categorize(build_cfg, trainer=KeywordTrainer())
    cache = build_cfg["run"]["cache_dir"]

    labeled = _read(os.path.join(cache, "categorized.csv"), Layout.LABELED)
    assert [(r.file, r.predicted_label) for r in labeled] == [
        ("1-getting-started.md", 0),
        ("1-monitoring.md", 1),
        ("2-advanced-install.md", 0),
    ]

    with open(os.path.join(cache, "summary.txt"), encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert lines[0].startswith("Category 0: Advanced Install,Getting Started,")
    assert lines[1:3] == ["\tAdvanced Install", "\tGetting Started"]
    assert lines[3].startswith("Category 1: Monitoring Dashboards")
    assert lines[4:] == ["\tMonitoring Dashboards"]
    assert set(manifest["categories"]) == {"0", "1"}


def test_categorize_with_kmeans(build_cfg):
    parse_repo(build_cfg)
    process_words(build_cfg)
    manifest = categorize(build_cfg)
    assert manifest["total_written_docs"] == 3
    assert 1 <= len(manifest["categories"]) <= 2


def test_parquet_session(build_cfg):
    build_cfg["output"] = {"format": "parquet"}
    parse_repo(build_cfg)
    manifest = process_words(build_cfg)
    assert manifest["outputs"]["records"].endswith("model-input.parquet")
    records = get_record_writer("parquet").read(manifest["outputs"]["records"], layout=Layout.TRAINING)
    assert len(records) == 3


def test_unknown_output_format(build_cfg):
    build_cfg["output"] = {"format": "xml"}
    with pytest.raises(KeyError):
        parse_repo(build_cfg)
