"""Reading time buckets."""

from __future__ import annotations
import math

WORDS_PER_MINUTE = 225.0


def estimate_reading_time(word_count: int, words_per_minute: float = WORDS_PER_MINUTE) -> str:
    """Turn a word count into a readable duration.

    Exactly one minute of reading already reads as "1 minutes".
    """
    minutes = word_count / float(words_per_minute)
    if minutes < 1:
        return "< 1 minute"
    if minutes < 60:
        return f"{math.floor(minutes)} minutes"

    hours = minutes / 60
    left_over = minutes % 60
    if left_over < 1:
        return f"{math.floor(hours)} hours"
    return f"{math.floor(hours)} hours and {math.floor(left_over)} minutes"
