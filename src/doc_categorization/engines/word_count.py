"""Corpus word counting.

The engine turns intermediate records into per-document term counts, total
word counts and corpus document frequencies. The pandas engine runs the
same dataframe plan a distributed engine would:

    split Words on " " -> explode -> lower-case -> group by (File, word) -> count
    totals:             sum(count) group by File
    document frequency: distinct File per word
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Protocol
import logging

import pandas as pd

from ..pipeline.context import DocumentRecord

log = logging.getLogger("doc_categorization.engines.word_count")


@dataclass
class CorpusCounts:
    term_counts: Dict[str, Dict[str, int]] = field(default_factory=dict)
    word_counts: Dict[str, int] = field(default_factory=dict)
    document_frequency: Dict[str, int] = field(default_factory=dict)
    total_documents: int = 0

    def terms(self, file: str) -> Dict[str, int]:
        return self.term_counts.get(file, {})

    def word_count(self, file: str) -> int:
        return self.word_counts.get(file, 0)


class WordCountEngine(Protocol):
    def count(self, records: Iterable[DocumentRecord]) -> CorpusCounts:
        ...


class PandasWordCountEngine:
    name = "pandas"

    def count(self, records: Iterable[DocumentRecord]) -> CorpusCounts:
        records = list(records)
        if not records:
            return CorpusCounts()

        docs = pd.DataFrame(
            {"File": [r.file for r in records], "Words": [r.words or "" for r in records]},
            dtype=object,
        )
        words = (
            docs.assign(word=docs["Words"].str.split(" "))
            .explode("word")
            .drop(columns=["Words"])
        )
        words["word"] = words["word"].fillna("").astype(str).str.lower()
        words = words[words["word"].str.strip() != ""]

        counts = words.groupby(["File", "word"]).size().reset_index(name="count")
        totals = counts.groupby("File")["count"].sum()
        frequency = counts.groupby("word")["File"].nunique()

        term_counts: Dict[str, Dict[str, int]] = {r.file: {} for r in records}
        for file, word, count in counts.itertuples(index=False, name=None):
            term_counts[file][word] = int(count)

        result = CorpusCounts(
            term_counts=term_counts,
            word_counts={r.file: int(totals.get(r.file, 0)) for r in records},
            document_frequency={w: int(n) for w, n in frequency.items()},
            total_documents=docs["File"].nunique(),
        )
        log.info(f"Counted words: documents={result.total_documents} vocabulary={len(result.document_frequency)}")
        return result
