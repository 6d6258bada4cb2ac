"""Stage registry.

Stages are configured by name in the build YAML (`stages.parse`,
`stages.words`). Stages that need run state (corpus counts) are built
only when requested.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
from ..engines.word_count import CorpusCounts
from ..text.stopwords import StopWordSet, load_stopwords
from ..words.scoring import MIN_WORD_LENGTH, TOP_WORDS, KeywordScorer
from .base import Stage
from .impl import KeywordSelection, ReadingTime, SlateNormalize, TitleGate

DEFAULT_PARSE_STAGES = ["title_gate"]
DEFAULT_WORDS_STAGES = ["slate_normalize", "title_gate", "keyword_selection", "reading_time"]

def make_scorer(words_cfg: Dict[str, Any], stopwords: Optional[StopWordSet] = None) -> KeywordScorer:
    if stopwords is None:
        stopwords = load_stopwords(words_cfg.get("stopwords"))
    return KeywordScorer(
        stopwords,
        top_n=int(words_cfg.get("top_words", TOP_WORDS)),
        min_length=int(words_cfg.get("min_word_length", MIN_WORD_LENGTH)),
    )

def make_stages(
    stage_names: List[str],
    words_cfg: Optional[Dict[str, Any]] = None,
    *,
    counts: Optional[CorpusCounts] = None,
    stopwords: Optional[StopWordSet] = None,
) -> List[Stage]:
    """
    Create processing stages from configuration.

    Args:
        stage_names: List of stage names to include, in order
        words_cfg: The `words` config section
        counts: Corpus counts, required by keyword_selection
        stopwords: Stop words for keyword_selection (default: packaged list or words.stopwords)
    """
    words_cfg = words_cfg or {}

    def _keyword_selection() -> Stage:
        if counts is None:
            raise ValueError("Stage keyword_selection needs corpus counts")
        return KeywordSelection(
            make_scorer(words_cfg, stopwords),
            counts,
            corpus_stats=bool(words_cfg.get("corpus_stats", True)),
        )

    name_to_factory: Dict[str, Callable[[], Stage]] = {
        "title_gate": TitleGate,
        "slate_normalize": SlateNormalize,
        "keyword_selection": _keyword_selection,
        "reading_time": lambda: ReadingTime(words_cfg.get("words_per_minute")),
    }

    stages = []
    for n in stage_names:
        if n not in name_to_factory:
            raise ValueError(f"Unknown stage: {n}. Register it in doc_categorization.stages.registry")
        stages.append(name_to_factory[n]())
    return stages
