"""Keyword scoring.

For one document:

    idf   = ln(total_documents + 1) / (document_frequency + 1)
    score = term_frequency * idf

Words shorter than `min_length` or in the stop-word set are excluded; the
top `top_n` by score (ties: higher term frequency, then alphabetical) are
joined with single spaces, highest first.

Without corpus statistics the raw term frequency is the rank key. A word
missing from the statistics has document frequency 0.
"""

from __future__ import annotations
from typing import List, Mapping, Optional, Tuple
import math

from ..text.stopwords import StopWordSet

TOP_WORDS = 20
MIN_WORD_LENGTH = 4


def inverse_document_frequency(document_frequency: int, total_documents: int) -> float:
    return math.log(total_documents + 1) / (document_frequency + 1)


class KeywordScorer:
    def __init__(self, stopwords: StopWordSet, *, top_n: int = TOP_WORDS, min_length: int = MIN_WORD_LENGTH):
        self.stopwords = stopwords
        self.top_n = int(top_n)
        self.min_length = int(min_length)

    def is_excluded(self, word: str) -> bool:
        return len(word) < self.min_length or word in self.stopwords

    def score(
        self,
        term_counts: Mapping[str, int],
        document_frequency: Optional[Mapping[str, int]] = None,
        total_documents: Optional[int] = None,
    ) -> List[Tuple[str, float]]:
        """Score every eligible word, best first."""
        use_corpus = document_frequency is not None and total_documents is not None
        scored = []
        for word, tf in term_counts.items():
            if self.is_excluded(word):
                continue
            if use_corpus:
                value = tf * inverse_document_frequency(document_frequency.get(word, 0), total_documents)
            else:
                value = float(tf)
            scored.append((word, value, tf))
        scored.sort(key=lambda s: (-s[1], -s[2], s[0]))
        return [(word, value) for word, value, _ in scored]

    def rank(self, *args, **kwargs) -> List[str]:
        return [word for word, _ in self.score(*args, **kwargs)[: self.top_n]]

    def select(
        self,
        term_counts: Mapping[str, int],
        document_frequency: Optional[Mapping[str, int]] = None,
        total_documents: Optional[int] = None,
    ) -> str:
        return " ".join(self.rank(term_counts, document_frequency, total_documents))
