import pytest

from doc_categorization.words.reading_time import estimate_reading_time


@pytest.mark.parametrize(
    "word_count,expected",
    [
        (0, "< 1 minute"),
        (100, "< 1 minute"),
        (224, "< 1 minute"),
        (225, "1 minutes"),
        (225 * 59, "59 minutes"),
        (225 * 60, "1 hours"),
        (225 * 65, "1 hours and 5 minutes"),
        (225 * 120, "2 hours"),
    ],
)
def test_reading_time_buckets(word_count, expected):
    assert estimate_reading_time(word_count) == expected


def test_words_per_minute_is_configurable():
    assert estimate_reading_time(300, words_per_minute=100) == "3 minutes"
