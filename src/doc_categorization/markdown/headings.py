"""Heading selection.

Turns the heading candidates gathered while parsing into the title slate:

1. duplicates (same text) keep only their most prominent (lowest) level
2. order by level, then longer text first
3. keep the first six
4. fill the slate in order, skipping candidates shorter than five characters
"""

from __future__ import annotations
from typing import Iterable, List

from ..pipeline.context import HeadingCandidate, SLATE_SIZE
from ..text.normalize import strip_quotes

MIN_HEADING_LENGTH = 5


def dedupe_headings(candidates: Iterable[HeadingCandidate]) -> List[HeadingCandidate]:
    """One candidate per distinct text, at its lowest level, in first-seen order."""
    best = {}
    order = []
    for cand in candidates:
        if cand.text not in best:
            order.append(cand.text)
            best[cand.text] = cand
        elif cand.level < best[cand.text].level:
            best[cand.text] = cand
    return [best[text] for text in order]


def rank_headings(candidates: Iterable[HeadingCandidate]) -> List[HeadingCandidate]:
    return sorted(dedupe_headings(candidates), key=lambda c: (c.level, -len(c.text)))


def select_headings(candidates: Iterable[HeadingCandidate]) -> List[str]:
    slate: List[str] = []
    for cand in rank_headings(candidates)[:SLATE_SIZE]:
        heading = strip_quotes(cand.text.strip())
        if len(heading) < MIN_HEADING_LENGTH:
            continue
        slate.append(heading)
    return slate
