"""Stop words excluded from keyword selection.

The set is built once at process start and passed to consumers explicitly.
It is immutable, so it can be shared between threads without locking.

Files are comma and/or newline separated; entries are case-folded.
"""

from __future__ import annotations
import re
from importlib import resources
from typing import Iterable, Iterator, Optional

_SPLIT_RE = re.compile(r"[,\r\n]+")


class StopWordSet:
    def __init__(self, words: Iterable[str]):
        self._words = frozenset(w.strip().lower() for w in words if w and w.strip())

    @classmethod
    def from_text(cls, text: str) -> "StopWordSet":
        return cls(_SPLIT_RE.split(text or ""))

    @classmethod
    def from_file(cls, path: str) -> "StopWordSet":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_text(f.read())

    @classmethod
    def default(cls) -> "StopWordSet":
        """The packaged English list."""
        text = resources.files("doc_categorization.text").joinpath("stopwords.txt").read_text(encoding="utf-8")
        return cls.from_text(text)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"StopWordSet(size={len(self._words)})"


def load_stopwords(path: Optional[str] = None) -> StopWordSet:
    """Load a user list when `path` is given, otherwise the packaged one."""
    if path:
        return StopWordSet.from_file(path)
    return StopWordSet.default()
