"""Document source interface.

A source walks some corpus and yields RawDocument items; parsing happens
downstream. `stream()` is a generator so a run can stop between documents.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable

@dataclass
class RawDocument:
    file_id: str
    text: str
    path: str

class DataSource:
    """Base interface for all sources."""
    name: str

    def metadata(self) -> Dict[str, Any]:
        return {}

    def stream(self) -> Iterable[RawDocument]:
        raise NotImplementedError
