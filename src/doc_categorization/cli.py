"""CLI entrypoint.

Commands:
- `doc-categorize parse --config build.yaml [--repo PATH] [--run-id ID]`
- `doc-categorize words --config build.yaml --run-id ID`
- `doc-categorize categorize --config build.yaml --run-id ID`
- `doc-categorize run --config build.yaml [--repo PATH]`  (parse -> words -> categorize)

Separate invocations share a session only through the same run id
(`run.run_id` in the config or `--run-id`).

Ctrl-C during parsing stops after the current document; what was parsed
so far is still written.
"""

from __future__ import annotations
import argparse
import logging
import os
import signal
import threading
from .config import load_yaml, resolve_paths
from .logging_ import setup_logging
from .pipeline.categorize import categorize
from .pipeline.parse import parse_repo
from .pipeline.words import process_words

log = logging.getLogger("doc_categorization.cli")

def _install_stop_handler(stop_event: threading.Event) -> None:
    def _handler(signum, frame):
        if stop_event.is_set():
            raise KeyboardInterrupt
        log.warning("Stop requested; finishing the current document (Ctrl-C again to abort)")
        stop_event.set()

    signal.signal(signal.SIGINT, _handler)

def main(argv=None) -> None:
    p = argparse.ArgumentParser(prog="doc-categorize")
    sub = p.add_subparsers(dest="cmd", required=True)

    for name, help_text in (
        ("parse", "Parse the markdown repository into intermediate records"),
        ("words", "Select keywords and reading time for parsed records"),
        ("categorize", "Cluster records and synthesize category titles"),
        ("run", "Run parse, words and categorize in one session"),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("--config", required=True)
        sp.add_argument("--run-id", default=None, help="Session id shared by the runs of one session")
        if name in ("parse", "run"):
            sp.add_argument("--repo", default=None, help="Markdown repository (overrides source.repo)")

    args = p.parse_args(argv)

    cfg = load_yaml(args.config)
    if getattr(args, "repo", None):
        cfg["source"] = dict(cfg.get("source") or {}, repo=args.repo)
    if args.run_id:
        cfg["run"] = dict(cfg.get("run") or {}, run_id=args.run_id)

    paths = resolve_paths(cfg)
    log_path = setup_logging(paths.cache_dir, paths.run_id, log_dir=(cfg.get("run") or {}).get("log_dir"))
    log.info(f"Session run_id={paths.run_id} cache_dir={paths.cache_dir} log={log_path} config={os.path.abspath(args.config)}")

    if args.cmd in ("parse", "run"):
        stop_event = threading.Event()
        _install_stop_handler(stop_event)
        parse_repo(cfg, stop_event=stop_event)
        if stop_event.is_set():
            return
    if args.cmd in ("words", "run"):
        process_words(cfg)
    if args.cmd in ("categorize", "run"):
        categorize(cfg)

if __name__ == "__main__":
    main()
