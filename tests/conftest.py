import pytest

DOCS = {
    "getting-started.md": "# Getting Started\n\ninstall install configure\n",
    "monitoring.md": "---\ntitle: Monitoring Dashboards\n---\n# Metrics\n\nmetrics alerts dashboard\n",
    "empty.md": "",
    "short.md": "# API\n\nnothing here\n",
    "advanced/install.md": "# Advanced Install\n\ninstall configure deploy\n",
}


@pytest.fixture
def docs_repo(tmp_path):
    repo = tmp_path / "repo"
    for rel, text in DOCS.items():
        path = repo / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return repo


@pytest.fixture
def build_cfg(tmp_path, docs_repo):
    return {
        "run": {"run_id": "test", "cache_dir": str(tmp_path / "cache" / "{run_id}")},
        "source": {"repo": str(docs_repo)},
        "categorize": {"clusters": 2, "seed": 0},
    }
