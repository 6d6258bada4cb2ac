"""Text normalization and stop words."""

from .normalize import STRIP_NON_ALPHA, extract_words, normalize_whitespace, strip_quotes, title_trim
from .stopwords import StopWordSet, load_stopwords

__all__ = [
    "STRIP_NON_ALPHA",
    "extract_words",
    "normalize_whitespace",
    "strip_quotes",
    "title_trim",
    "StopWordSet",
    "load_stopwords",
]
