"""Show information about a session: per-run manifests and category titles.

Usage:
    python scripts/show_run_info.py <cache_dir>
"""

from __future__ import annotations
import glob
import json
import os
import sys

RUN_ORDER = ("parse", "words", "categorize")

def show_run_info(cache_dir: str) -> None:
    print(f"\n{'='*60}")
    print(f"Session: {cache_dir}")
    print(f"{'='*60}\n")

    manifests = {}
    for path in glob.glob(os.path.join(cache_dir, "manifests", "*.json")):
        with open(path, "r", encoding="utf-8") as f:
            m = json.load(f)
        manifests[m.get("stage")] = m

    if not manifests:
        print("No manifests found. Has a run completed in this session?")
        return

    for stage in RUN_ORDER:
        m = manifests.get(stage)
        if m is None:
            print(f"  {stage}: not run")
            continue
        print(f"  {stage}: processed={m.get('total_processed_docs', 0):,} "
              f"written={m.get('total_written_docs', 0):,} rejected={m.get('total_rejected_docs', 0):,}")
        for name, path in (m.get("outputs") or {}).items():
            print(f"    {name}: {path}")
        if m.get("stopped"):
            print("    (stopped early)")

    categories = (manifests.get("categorize") or {}).get("categories") or {}
    if categories:
        print("\nCategories:")
        print("-" * 60)
        for cid in sorted(categories, key=int):
            print(f"  {cid}: {categories[cid]}")
    print()

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    show_run_info(sys.argv[1])
