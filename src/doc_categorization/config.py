"""Build configuration.

Configs are YAML files read into nested dicts; each section is optional and
defaults are applied where values are used. See `examples/build_local.yaml`.

Session file layout (under the cache dir):
- docs-input.<fmt>      intermediate records (parse output)
- model-input.<fmt>     training records (words output)
- categorized.<fmt>     labeled records (categorize output)
- summary.txt           category titles and member titles
- words/<file-id>       word bag per parsed document
- rejections/rejections.jsonl
- manifests/<run_id>-<stage>.json
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict
import os
import yaml

from .run_id import resolve_cache_dir, resolve_run_id

INTERMEDIATE_TABLE = "docs-input"
TRAINING_TABLE = "model-input"
LABELED_TABLE = "categorized"


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    return cfg.get(name) or {}


@dataclass
class RunPaths:
    run_id: str
    cache_dir: str

    @property
    def words_dir(self) -> str:
        return os.path.join(self.cache_dir, "words")

    @property
    def rejections(self) -> str:
        return os.path.join(self.cache_dir, "rejections", "rejections.jsonl")

    @property
    def summary(self) -> str:
        return os.path.join(self.cache_dir, "summary.txt")

    def table(self, name: str, suffix: str) -> str:
        return os.path.join(self.cache_dir, f"{name}{suffix}")

    def manifest(self, stage: str) -> str:
        return os.path.join(self.cache_dir, "manifests", f"{self.run_id}-{stage}.json")


def resolve_paths(cfg: Dict[str, Any]) -> RunPaths:
    """Resolve the session and pin it into cfg["run"] so later runs reuse it."""
    if not isinstance(cfg.get("run"), dict):
        cfg["run"] = {}
    run = cfg["run"]
    run_id = resolve_run_id(cfg)
    cache_dir = resolve_cache_dir(cfg, run_id)
    run["run_id"] = run_id
    run["cache_dir"] = cache_dir
    os.makedirs(cache_dir, exist_ok=True)
    return RunPaths(run_id=run_id, cache_dir=cache_dir)
