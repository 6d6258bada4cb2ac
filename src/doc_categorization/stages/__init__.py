from .base import Stage
from .impl import KeywordSelection, ReadingTime, SlateNormalize, TitleGate
from .registry import DEFAULT_PARSE_STAGES, DEFAULT_WORDS_STAGES, make_scorer, make_stages

__all__ = [
    "Stage",
    "KeywordSelection",
    "ReadingTime",
    "SlateNormalize",
    "TitleGate",
    "DEFAULT_PARSE_STAGES",
    "DEFAULT_WORDS_STAGES",
    "make_scorer",
    "make_stages",
]
