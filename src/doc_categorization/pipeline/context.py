"""Core pipeline data model.

DocumentRecord is the row flowing through the three runs (parse, words,
categorize). Each run mutates the record in place and hands it on; nothing
mutates a record after it is written.

The heading slate is a bounded ordered list. Positions are mapped to the
Title / Subtitle1..5 columns only when a record is serialized.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

SLATE_SIZE = 6


class HeadingCandidate(NamedTuple):
    """A (level, text) pair. Level 0 is reserved for front-matter titles."""
    level: int
    text: str


@dataclass
class DocumentRecord:
    # identity
    file: str = ""

    # title, subtitle1..subtitle5
    headings: List[str] = field(default_factory=list)

    # parse output, consumed by the words run
    words: str = ""

    # words output
    top_words: str = ""
    word_count: int = 0
    reading_time: str = ""

    # categorize output
    predicted_label: Optional[int] = None
    score: Optional[List[float]] = None

    @property
    def title(self) -> str:
        return self.headings[0] if self.headings else ""

    def slate(self) -> List[str]:
        """All six slate positions, empty strings for unset ones."""
        padded = list(self.headings[:SLATE_SIZE])
        return padded + [""] * (SLATE_SIZE - len(padded))

    @property
    def is_valid(self) -> bool:
        return bool(self.file.strip()) and bool(self.title.strip())


@dataclass
class Decision:
    accepted: bool
    stage: str
    reason_code: str = ""
    reason_detail: str = ""
