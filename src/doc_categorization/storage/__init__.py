"""Side outputs: rejections, manifests, words cache, summaries."""

from .writer import append_jsonl, write_category_summary, write_manifest, write_words_file

__all__ = ["append_jsonl", "write_category_summary", "write_manifest", "write_words_file"]
