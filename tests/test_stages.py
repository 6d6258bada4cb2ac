import pytest

from doc_categorization.engines.word_count import CorpusCounts
from doc_categorization.pipeline.context import DocumentRecord
from doc_categorization.stages import KeywordSelection, ReadingTime, SlateNormalize, TitleGate, make_stages
from doc_categorization.stages.registry import make_scorer
from doc_categorization.text.stopwords import StopWordSet


def _counts():
    return CorpusCounts(
        term_counts={"1-a.md": {"install": 2, "configure": 1}, "1-b.md": {"install": 1, "deploy": 1}},
        word_counts={"1-a.md": 3, "1-b.md": 2},
        document_frequency={"install": 2, "configure": 1, "deploy": 1},
        total_documents=2,
    )


def test_title_gate():
    gate = TitleGate()
    assert gate.apply(DocumentRecord(file="1-a.md", headings=["Title here"])).accepted
    d = gate.apply(DocumentRecord(file="1-a.md"))
    assert not d.accepted
    assert d.reason_code == "TITLE_MISSING"
    assert gate.apply(DocumentRecord(headings=["Title here"])).reason_code == "FILE_MISSING"


def test_slate_normalize_keeps_slate_dense():
    record = DocumentRecord(file="1-a.md", headings=["Hello, World!", "!!!", "Next one"])
    assert SlateNormalize().apply(record).accepted
    assert record.headings == ["Hello World", "Next one"]


def test_keyword_selection_sets_top_words_and_count():
    stage = KeywordSelection(make_scorer({}, StopWordSet([])), _counts())
    record = DocumentRecord(file="1-b.md", headings=["Deploying"], words="install deploy")
    assert stage.apply(record).accepted
    assert record.top_words == "deploy install"
    assert record.word_count == 2
    assert record.words == ""


def test_keyword_selection_without_corpus_statistics():
    stage = KeywordSelection(make_scorer({}, StopWordSet([])), _counts(), corpus_stats=False)
    record = DocumentRecord(file="1-a.md", headings=["Install"])
    stage.apply(record)
    assert record.top_words == "install configure"


def test_reading_time_stage():
    record = DocumentRecord(file="1-a.md", word_count=225 * 3)
    ReadingTime().apply(record)
    assert record.reading_time == "3 minutes"
    ReadingTime(words_per_minute=1000).apply(record)
    assert record.reading_time == "< 1 minute"


def test_make_stages_in_order():
    stages = make_stages(["slate_normalize", "title_gate", "keyword_selection", "reading_time"],
                         {"top_words": 5}, counts=_counts(), stopwords=StopWordSet([]))
    assert [s.name for s in stages] == ["slate_normalize", "title_gate", "keyword_selection", "reading_time"]
    assert stages[2].scorer.top_n == 5


def test_make_stages_errors():
    with pytest.raises(ValueError):
        make_stages(["no_such_stage"])
    with pytest.raises(ValueError):
        make_stages(["keyword_selection"])
