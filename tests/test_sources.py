import pytest

from doc_categorization.sources import MarkdownRepoSource, make_file_id, unique_file_id


def _repo(tmp_path):
    (tmp_path / "docs" / "setup").mkdir(parents=True)
    (tmp_path / "a.md").write_text("# Root doc", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not markdown", encoding="utf-8")
    (tmp_path / "docs" / "intro.md").write_text("# Intro page", encoding="utf-8")
    (tmp_path / "docs" / "setup" / "install.MD").write_text("# Install page", encoding="utf-8")
    return tmp_path


def test_make_file_id():
    assert make_file_id(3, "docs/setup/install.md") == "3-docs-setup-install.md"
    assert make_file_id(1, "readme.md") == "1-readme.md"


def test_walk_levels_files_first(tmp_path):
    src = MarkdownRepoSource(str(_repo(tmp_path)))
    walked = [(level, path[len(str(tmp_path)) + 1:]) for level, path in src.walk()]
    assert [level for level, _ in walked] == [1, 2, 3]
    assert walked[0][1] == "a.md"


def test_stream_yields_file_ids_and_text(tmp_path):
    src = MarkdownRepoSource(str(_repo(tmp_path)))
    docs = list(src.stream())
    assert [d.file_id for d in docs] == ["1-a.md", "2-docs-intro.md", "3-docs-setup-install.MD"]
    assert docs[1].text == "# Intro page"
    assert src.metadata()["file_count"] == 3


def test_undecodable_bytes_are_replaced(tmp_path):
    (tmp_path / "bad.md").write_bytes(b"# Title \xff here")
    [doc] = list(MarkdownRepoSource(str(tmp_path)).stream())
    assert doc.text == "# Title � here"


def test_custom_extensions(tmp_path):
    src = MarkdownRepoSource(str(_repo(tmp_path)), extensions=[".txt"])
    assert [d.file_id for d in src.stream()] == ["1-notes.txt"]


def test_invalid_repo(tmp_path):
    with pytest.raises(ValueError):
        MarkdownRepoSource(str(tmp_path / "missing"))
    with pytest.raises(ValueError):
        MarkdownRepoSource("")


def test_colliding_paths_get_distinct_file_ids(tmp_path):
    (tmp_path / "x").mkdir()
    (tmp_path / "x-a").mkdir()
    (tmp_path / "x" / "a-b.md").write_text("# First page", encoding="utf-8")
    (tmp_path / "x-a" / "b.md").write_text("# Second page", encoding="utf-8")
    assert make_file_id(2, "x/a-b.md") == make_file_id(2, "x-a/b.md")

    docs = list(MarkdownRepoSource(str(tmp_path)).stream())
    ids = [d.file_id for d in docs]
    assert len(set(ids)) == 2
    assert ids[0] == "2-x-a-b.md"
    assert ids[1].startswith("2-x-a-b.md-")
    assert docs[1].text == "# Second page"


def test_unique_file_id_is_deterministic():
    issued = set()
    assert unique_file_id("1-a.md", "a.md", issued) == "1-a.md"
    first = unique_file_id("1-a.md", "other/a.md", issued)
    again = unique_file_id("1-a.md", "other/a.md", {"1-a.md"})
    assert first == again != "1-a.md"
    assert issued == {"1-a.md", first}
