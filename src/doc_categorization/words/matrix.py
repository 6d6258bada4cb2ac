"""Word and phrase frequency accounting.

WordFrequencyMatrix counts words (or title prefix-phrases) for one scope:
a document or a category. CategoryMatrix maps category ids to matrices and
synthesizes a readable title per category.

Concurrency:
- every matrix serializes its own mutations with a lock, so concurrent
  feeders never lose counts
- CategoryMatrix guards get-or-create, so two threads asking for a new id
  receive the same matrix
- partial matrices built independently combine with `merge`, a key-wise sum
  (associative and commutative)
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple
import threading

from ..text.normalize import STRIP_NON_ALPHA, strip_quotes

CATEGORY_TITLE_WORDS = 10


def token_count(word: str) -> int:
    return len(word.split(" "))


def weight(word: str, count: int) -> int:
    """Favour multi-word phrases over single words at equal count."""
    return token_count(word) ** 2 * count


class WordFrequencyMatrix:
    def __init__(self, counts: Optional[Mapping[str, int]] = None):
        self._counts: Dict[str, int] = {}
        self._lock = threading.RLock()
        if counts:
            for word, count in counts.items():
                self.add(word, count)

    def __getitem__(self, word: str) -> int:
        return self._counts.get(word, 0)

    def __contains__(self, word: object) -> bool:
        return word in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._counts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordFrequencyMatrix):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"WordFrequencyMatrix(words={len(self._counts)})"

    def as_dict(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def add(self, word: str, count: int = 1) -> None:
        """Add `count` occurrences of `word` (quotes stripped, blanks ignored)."""
        word = strip_quotes(word)
        if not word.strip() or count <= 0:
            return
        with self._lock:
            self._counts[word] = self._counts.get(word, 0) + count

    def increment(self, word: str) -> None:
        self.add(word, 1)

    def parse_words(self, text: str, is_title: bool = False) -> None:
        """Count the space-delimited words of `text`.

        In title mode every prefix phrase is counted once: "a b c" counts
        "a", "a b" and "a b c". A prefix whose last token has nothing
        alphanumeric left (or is just "-") is skipped.
        """
        parts = strip_quotes(text).split(" ")
        with self._lock:
            if not is_title:
                for word in parts:
                    self.increment(word)
                return
            for idx, last in enumerate(parts):
                check = STRIP_NON_ALPHA.sub("", last)
                if not check.strip() or check == "-":
                    continue
                self.increment(" ".join(parts[: idx + 1]))

    def words_high_to_low(self) -> List[Tuple[str, int]]:
        """All (word, count) pairs: count desc, then weight desc, then word."""
        with self._lock:
            items = list(self._counts.items())
        return sorted(items, key=lambda wc: (-wc[1], -weight(wc[0], wc[1]), wc[0]))

    def update(self, other: "WordFrequencyMatrix") -> "WordFrequencyMatrix":
        """Sum `other` into this matrix in place."""
        for word, count in other.as_dict().items():
            self.add(word, count)
        return self

    def merge(self, other: "WordFrequencyMatrix") -> "WordFrequencyMatrix":
        """Key-wise sum of two matrices as a new matrix."""
        merged = WordFrequencyMatrix(self.as_dict())
        return merged.update(other)

    __add__ = merge


class CategoryMatrix:
    """Word matrices per category id, created on first access."""

    def __init__(self):
        self._categories: Dict[int, WordFrequencyMatrix] = {}
        self._lock = threading.Lock()

    def matrix(self, category: int) -> WordFrequencyMatrix:
        with self._lock:
            found = self._categories.get(category)
            if found is None:
                found = self._categories[category] = WordFrequencyMatrix()
            return found

    __getitem__ = matrix

    def __contains__(self, category: object) -> bool:
        return category in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def categories(self) -> List[int]:
        with self._lock:
            return sorted(self._categories)

    def add(self, category: int, top_words: str, title: str) -> None:
        """Feed one labeled document into its category."""
        m = self.matrix(category)
        m.parse_words(top_words or "")
        m.parse_words(title or "", is_title=True)

    def feed(self, labeled: Iterable[Tuple[int, str, str]]) -> None:
        for category, top_words, title in labeled:
            self.add(category, top_words, title)

    def title(self, category: int, words: int = CATEGORY_TITLE_WORDS) -> str:
        """Top words by frequency/weight, re-ordered longest first, comma-joined."""
        top = self.matrix(category).words_high_to_low()[:words]
        return ",".join(w for w, _ in sorted(top, key=lambda wc: -len(wc[0])))

    def merge(self, other: "CategoryMatrix") -> "CategoryMatrix":
        merged = CategoryMatrix()
        for source in (self, other):
            for category in source.categories():
                merged.matrix(category).update(source.matrix(category))
        return merged
