import pytest

from doc_categorization.pipeline.context import DocumentRecord
from doc_categorization.records import Layout, format_header, format_row, parse_rows


def _record(**kw):
    base = dict(file="1-a.md", headings=["Install Guide", 'Say "hi"'], words="install guide")
    base.update(kw)
    return DocumentRecord(**base)


def test_intermediate_header_and_row_are_quoted_with_crlf():
    header = format_header(Layout.INTERMEDIATE)
    assert header == (
        '"File","Title","Subtitle1","Subtitle2","Subtitle3","Subtitle4","Subtitle5","Words"\r\n'
    )
    row = format_row(_record(), Layout.INTERMEDIATE)
    assert row == '"1-a.md","Install Guide","Say ""hi""","","","","","install guide"\r\n'


def test_training_word_count_is_bare_numeric():
    record = _record(top_words="install guide", word_count=42, reading_time="< 1 minute", words="")
    row = format_row(record, Layout.TRAINING)
    assert row.endswith(',"install guide",42,"< 1 minute",""\r\n')


def test_labeled_layout_unwraps_pre_quoted_values():
    record = _record(top_words='"alpha beta"', word_count=3, reading_time="< 1 minute", predicted_label=4)
    row = format_row(record, Layout.LABELED)
    assert row.endswith(',3,"< 1 minute","alpha beta",4\r\n')


def test_training_round_trip_reproduces_fields():
    record = _record(top_words='a "b" c', word_count=7, reading_time="1 minutes", words="x, y")
    text = format_header(Layout.TRAINING) + format_row(record, Layout.TRAINING)
    [back] = parse_rows(text, Layout.TRAINING)
    assert back.file == record.file
    assert back.headings == record.headings
    assert back.top_words == record.top_words
    assert back.word_count == 7
    assert back.reading_time == "1 minutes"
    assert back.words == "x, y"
    # encoding the parsed row again gives the same bytes
    assert format_row(back, Layout.TRAINING) == format_row(record, Layout.TRAINING)


def test_labeled_round_trip_reads_predicted_label():
    record = _record(predicted_label=2, word_count=1)
    text = format_header(Layout.LABELED) + format_row(record, Layout.LABELED)
    [back] = parse_rows(text, Layout.LABELED)
    assert back.predicted_label == 2


def test_missing_columns_raise():
    text = format_header(Layout.INTERMEDIATE)
    with pytest.raises(ValueError):
        parse_rows(text, Layout.TRAINING)


def test_layout_columns():
    assert Layout.LABELED.columns[-4:] == ["WordCount", "ReadingTime", "Top20Words", "PredictedLabel"]
    assert Layout("training") is Layout.TRAINING
