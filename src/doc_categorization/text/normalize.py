"""Text normalization for word bags, headings and phrase keys.

All fragments extracted from a document go through `extract_words` and are
concatenated; `normalize_whitespace` is applied once to the concatenation.
"""

from __future__ import annotations
import re
import unicodedata

# anything that is not a word character, a space, '@' or '-'
STRIP_NON_ALPHA = re.compile(r"[^\w @-]")

# Unicode space separators plus line/paragraph separators and the ASCII
# controls \t \n \v \f \r and NEL. The information separators \x1c-\x1f
# are not whitespace here.
_WHITESPACE_RE = re.compile(
    "[ \t\n\x0b\x0c\r\x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+"
)


def extract_words(source: str) -> str:
    """Strip non-word characters and return the result with one leading space.

    Empty or whitespace-only input yields an empty string.
    """
    if not source or source.isspace():
        return ""
    return " " + STRIP_NON_ALPHA.sub("", source)


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace to one ASCII space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip(" ")


def strip_quotes(text: str) -> str:
    return (text or "").replace('"', "")


def _is_trim_char(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch).startswith("P")


def title_trim(text: str) -> str:
    """Trim surrounding whitespace and punctuation from a heading."""
    if not text:
        return ""
    start, end = 0, len(text)
    while start < end and _is_trim_char(text[start]):
        start += 1
    while end > start and _is_trim_char(text[end - 1]):
        end -= 1
    return text[start:end]
