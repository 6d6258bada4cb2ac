"""Side outputs of a run.

- `rejections.jsonl` for auditability (append-only)
- a JSON manifest per run and stage
- the per-document word bag cache (`words/<file-id>`)
- the category summary text
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List
import os
import json
from ..pipeline.context import DocumentRecord

def append_jsonl(path: str, rows: List[Dict[str, Any]]) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")

def write_manifest(path: str, manifest: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)

def write_words_file(words_dir: str, record: DocumentRecord) -> str:
    os.makedirs(words_dir, exist_ok=True)
    path = os.path.join(words_dir, record.file)
    with open(path, "w", encoding="utf-8") as f:
        f.write(record.words)
    return path

def write_category_summary(path: str, lines: Iterable[str]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
