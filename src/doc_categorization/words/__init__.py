"""Word frequency matrices, keyword scoring and reading time."""

from .matrix import CategoryMatrix, WordFrequencyMatrix, weight
from .reading_time import estimate_reading_time
from .scoring import KeywordScorer, inverse_document_frequency

__all__ = [
    "CategoryMatrix",
    "WordFrequencyMatrix",
    "weight",
    "estimate_reading_time",
    "KeywordScorer",
    "inverse_document_frequency",
]
