"""doc_categorization

Markdown documentation categorization: structural parsing, keyword
weighting and cluster titling for a documentation repository.

Public API surface:
- doc_categorization.cli.main : CLI entrypoint
- doc_categorization.markdown.parse : (file_id, raw_text) -> DocumentRecord
- doc_categorization.words.estimate_reading_time : word count -> duration bucket
- doc_categorization.words.CategoryMatrix : per-category word matrices and titles
- doc_categorization.pipeline.parse / words / categorize : the session runners
- doc_categorization.engines : word-count engine and cluster trainer adapters
"""
__all__ = ["__version__"]
__version__ = "0.3.0"
