from doc_categorization.text.stopwords import StopWordSet, load_stopwords


def test_from_text_splits_commas_and_newlines():
    words = StopWordSet.from_text("the, And\nof\r\n,,")
    assert len(words) == 3
    assert "and" in words
    assert "AND" in words
    assert "install" not in words


def test_default_list_is_packaged():
    words = StopWordSet.default()
    assert "the" in words
    assert "install" not in words
    assert len(words) > 100


def test_load_stopwords_from_file(tmp_path):
    path = tmp_path / "stop.txt"
    path.write_text("alpha,beta\ngamma\n", encoding="utf-8")
    words = load_stopwords(str(path))
    assert list(words) == ["alpha", "beta", "gamma"]
    assert "the" not in words


def test_non_string_is_never_a_stop_word():
    assert 3 not in StopWordSet(["3"])
