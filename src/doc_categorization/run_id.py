"""Session resolution: explicit run id or auto-generated from config.

The three runs of one session (parse, words, categorize) share a run id,
and through it a cache directory. Pass the same explicit `run.run_id` (or
`--run-id`) to each separate invocation.

Auto-generation uses:
- prefix_digits / suffix_digits: first/last N digits of a compact timestamp
- include_repo_name: name derived from the source repository directory
"""

from __future__ import annotations
import os
import re
from datetime import datetime, timezone
from typing import Any, Dict

DEFAULT_CACHE_DIR = os.path.join("cache", "{run_id}")


def _timestamp_digits(prefix: int = 8, suffix: int = 6) -> tuple[str, str]:
    """Compact timestamp YYYYMMDDHHMMSS; return (first prefix_digits, last suffix_digits)."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")  # 14 digits
    a = ts[: min(prefix, len(ts))]
    b = ts[-min(suffix, len(ts)):] if suffix else ""
    return (a, b)


def _repo_name(cfg: Dict[str, Any]) -> str:
    repo = (cfg.get("source") or {}).get("repo")
    if not repo:
        return "run"
    name = os.path.basename(os.path.normpath(str(repo)))
    # safe for run_id: alphanumeric, underscore, dash
    name = re.sub(r"[^\w\-]", "_", name)
    return name or "run"


def generate_run_id(cfg: Dict[str, Any], auto_cfg: Dict[str, Any]) -> str:
    """Build a run id from run.run_id_auto.

    auto_cfg may contain:
    - prefix_digits: first N digits of timestamp (default 8 -> date)
    - suffix_digits: last N digits of timestamp (default 6 -> time)
    - include_repo_name: bool (default True)
    - separator: string between parts (default "_")
    """
    prefix_digits = int(auto_cfg.get("prefix_digits", 8))
    suffix_digits = int(auto_cfg.get("suffix_digits", 6))
    include_repo_name = auto_cfg.get("include_repo_name", True)
    separator = str(auto_cfg.get("separator", "_"))

    parts: list[str] = []
    if include_repo_name:
        parts.append(_repo_name(cfg))
    pre, suf = _timestamp_digits(prefix_digits, suffix_digits)
    if pre:
        parts.append(pre)
    if suf:
        parts.append(suf)
    return separator.join(parts) if parts else "run"


def resolve_run_id(cfg: Dict[str, Any]) -> str:
    """Return explicit run.run_id, or auto-generated from run.run_id_auto, or 'run'."""
    run = cfg.get("run") or {}
    explicit = run.get("run_id")
    if explicit is not None and str(explicit).strip():
        return str(explicit).strip()
    auto_cfg = run.get("run_id_auto")
    if auto_cfg is None:
        auto_cfg = {}
    if isinstance(auto_cfg, dict) and auto_cfg.get("enabled", True):
        return generate_run_id(cfg, auto_cfg)
    return "run"


def resolve_cache_dir(cfg: Dict[str, Any], run_id: str) -> str:
    """Return run.cache_dir with the {run_id} placeholder replaced."""
    run = cfg.get("run") or {}
    cache_dir = run.get("cache_dir") or DEFAULT_CACHE_DIR
    return str(cache_dir).replace("{run_id}", run_id)
