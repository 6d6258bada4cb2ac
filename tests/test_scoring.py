import math

import pytest

from doc_categorization.text.stopwords import StopWordSet
from doc_categorization.words.scoring import KeywordScorer, inverse_document_frequency


def test_inverse_document_frequency():
    assert inverse_document_frequency(2, 2) == pytest.approx(math.log(3) / 3)
    assert inverse_document_frequency(0, 9) == pytest.approx(math.log(10))


def test_common_word_ranks_below_document_unique_word():
    # "Getting Started": install install configure / "Advanced Install": install configure deploy
    document_frequency = {"install": 2, "configure": 2, "deploy": 1}
    scorer = KeywordScorer(StopWordSet.default())
    second = {"install": 1, "configure": 1, "deploy": 1}

    scores = dict(scorer.score(second, document_frequency, 2))
    assert scores["deploy"] > scores["install"]
    assert scorer.rank(second, document_frequency, 2) == ["deploy", "configure", "install"]

    first = {"install": 2, "configure": 1}
    assert scorer.select(first, document_frequency, 2) == "install configure"


def test_short_and_stop_words_are_excluded():
    scorer = KeywordScorer(StopWordSet(["there"]))
    ranked = scorer.rank({"api": 9, "there": 9, "cluster": 1})
    assert ranked == ["cluster"]


def test_min_length_is_configurable():
    scorer = KeywordScorer(StopWordSet([]), min_length=2)
    assert scorer.rank({"go": 1, "a": 5}) == ["go"]


def test_raw_term_frequency_without_corpus_statistics():
    scorer = KeywordScorer(StopWordSet([]))
    assert scorer.select({"alpha": 1, "gamma": 3, "beta": 3}) == "beta gamma alpha"


def test_word_missing_from_statistics_has_zero_document_frequency():
    scorer = KeywordScorer(StopWordSet([]))
    [(word, score)] = scorer.score({"rare": 1}, {}, 2)
    assert word == "rare"
    assert score == pytest.approx(math.log(3))


def test_top_n_limits_selection():
    scorer = KeywordScorer(StopWordSet([]), top_n=20)
    counts = {f"word{i:02d}": 100 - i for i in range(30)}
    selected = scorer.select(counts).split(" ")
    assert len(selected) == 20
    assert selected[0] == "word00"
    assert selected[-1] == "word19"


def test_empty_counts():
    assert KeywordScorer(StopWordSet([])).select({}) == ""
