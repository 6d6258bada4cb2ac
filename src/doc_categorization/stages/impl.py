"""Built-in stages.

- title gate: drops records without an identifier or a title
- slate normalize: re-extracts heading slate text, keeping it dense
- keyword selection: top keywords and word count from corpus counts
- reading time: duration bucket from the word count
"""

from __future__ import annotations
from typing import Optional
from ..engines.word_count import CorpusCounts
from ..pipeline.context import DocumentRecord, Decision
from ..text.normalize import extract_words
from ..words.reading_time import WORDS_PER_MINUTE, estimate_reading_time
from ..words.scoring import KeywordScorer
from .base import Stage

class TitleGate(Stage):
    name = "title_gate"
    layer = "validation"

    def apply(self, record: DocumentRecord) -> Decision:
        if not record.file.strip():
            return Decision(False, self.name, "FILE_MISSING", "record has no file identifier")
        if not record.title.strip():
            return Decision(False, self.name, "TITLE_MISSING", f"file={record.file}")
        return Decision(True, self.name)

class SlateNormalize(Stage):
    name = "slate_normalize"
    layer = "words"

    def apply(self, record: DocumentRecord) -> Decision:
        # entries that extract to nothing are dropped so the slate stays dense
        slate = [extract_words(h).strip() for h in record.headings]
        record.headings = [h for h in slate if h]
        return Decision(True, self.name)

class KeywordSelection(Stage):
    name = "keyword_selection"
    layer = "words"

    def __init__(self, scorer: KeywordScorer, counts: CorpusCounts, *, corpus_stats: bool = True):
        self.scorer = scorer
        self.counts = counts
        self.corpus_stats = corpus_stats

    def apply(self, record: DocumentRecord) -> Decision:
        terms = self.counts.terms(record.file)
        if self.corpus_stats:
            record.top_words = self.scorer.select(
                terms, self.counts.document_frequency, self.counts.total_documents
            )
        else:
            record.top_words = self.scorer.select(terms)
        record.word_count = self.counts.word_count(record.file)
        # the word bag is consumed here
        record.words = ""
        return Decision(True, self.name)

class ReadingTime(Stage):
    name = "reading_time"
    layer = "words"

    def __init__(self, words_per_minute: Optional[float] = None):
        self.words_per_minute = float(words_per_minute or WORDS_PER_MINUTE)

    def apply(self, record: DocumentRecord) -> Decision:
        record.reading_time = estimate_reading_time(record.word_count, self.words_per_minute)
        return Decision(True, self.name)
