"""Markdown repository source.

Walks a directory tree: files of a directory first (sorted), then its
subdirectories (sorted). Files at the root are level 1; every
subdirectory adds one level.

File identifiers are `"<level>-<relative path with separators as '-'>"`,
e.g. `docs/setup/install.md` under the root becomes `3-docs-setup-install.md`.
Hyphenated names can map to the same plain identifier (`x/a-b.md` and
`x-a/b.md`); within one walk, any identifier already issued gets a short
hash of its relative path appended, so every document keeps its own id.
"""

from __future__ import annotations
import hashlib
import logging
import os
from pathlib import Path, PurePath
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Set, Tuple
from .base import DataSource, RawDocument

log = logging.getLogger("doc_categorization.sources.markdown_repo")

DEFAULT_EXTENSIONS = (".md",)

def make_file_id(level: int, relative_path: str) -> str:
    parts = [p for p in Path(relative_path).parts if p not in ("", ".", os.sep)]
    return f"{level}-{'-'.join(parts)}"

def unique_file_id(file_id: str, relative_path: str, issued: Set[str]) -> str:
    """Return `file_id`, or a hashed variant when it was already issued."""
    key = PurePath(relative_path).as_posix()
    candidate = file_id
    salt = 0
    while candidate in issued:
        digest = hashlib.sha256(f"{key}#{salt}".encode("utf-8")).hexdigest()[:8]
        candidate = f"{file_id}-{digest}"
        salt += 1
    if candidate != file_id:
        log.debug(f"File id {file_id} already issued; using {candidate} for {key}")
    issued.add(candidate)
    return candidate
class MarkdownRepoSource(DataSource):
    def __init__(self, repo: str, extensions: Sequence[str] = DEFAULT_EXTENSIONS, name: str = "markdown_repo"):
        if not repo:
            raise ValueError("A repository path is required")
        if not os.path.isdir(repo):
            raise ValueError(f"Invalid path: {repo}")
        self.repo = repo
        self.name = name
        self.extensions = tuple(e.lower() for e in extensions)

    def _matches(self, filename: str) -> bool:
        return filename.lower().endswith(self.extensions)

    def walk(self, root: Optional[str] = None, level: int = 1) -> Iterator[Tuple[int, str]]:
        """Yield (level, path) for every matching file below `root`."""
        root = root or self.repo
        try:
            entries = sorted(os.scandir(root), key=lambda e: e.name)
        except OSError as e:
            log.warning(f"Could not list {root}: {e}")
            return
        for entry in entries:
            if entry.is_file() and self._matches(entry.name):
                yield level, entry.path
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from self.walk(entry.path, level + 1)

    def metadata(self) -> Dict[str, Any]:
        files = list(self.walk())
        return {
            "kind": "markdown_repo",
            "repo": os.path.abspath(self.repo),
            "extensions": list(self.extensions),
            "file_count": len(files),
        }

    def stream(self) -> Iterable[RawDocument]:
        issued: Set[str] = set()
        for level, path in self.walk():
            try:
                text = Path(path).read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                log.warning(f"Could not read {path}: {e}, skipping")
                continue
            rel = os.path.relpath(path, self.repo)
            file_id = unique_file_id(make_file_id(level, rel), rel, issued)
            yield RawDocument(file_id=file_id, text=text, path=path)
