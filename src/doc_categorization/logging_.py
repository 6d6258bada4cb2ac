"""Logging utilities.

We use Python's standard `logging` module with a plain structured format.

- Logs go to: `<log_dir>/<run_id>.log` (default `<cache_dir>/logs`)
- Also prints concise progress to stdout.
"""

from __future__ import annotations
import logging
import os
from typing import Optional

def setup_logging(cache_dir: str, run_id: str, log_dir: Optional[str] = None, level: int = logging.INFO) -> str:
    """
    Setup logging configuration and return the log file path.

    Args:
        cache_dir: Session cache directory
        run_id: Run identifier
        log_dir: Log directory (if None, uses cache_dir/logs)
        level: Root log level
    """
    if log_dir is None:
        log_dir = os.path.join(cache_dir, "logs")

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"{run_id}.log")

    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    # File
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    root.addHandler(ch)
    return log_path
