"""Record writers.

A writer persists a list of DocumentRecord in one of the three layouts and
loads back files it produced, so each run can read the previous run's
output in the configured format.

CSV is the interchange format; Parquet mirrors the same columns.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List
from ..pipeline.context import DocumentRecord
from ..records import Layout

class RecordWriter(ABC):
    name: str
    suffix: str

    @abstractmethod
    def write(self, records: Iterable[DocumentRecord], *, path: str, layout: Layout) -> str:
        """Write all records (header first) and return the output path."""
        raise NotImplementedError

    @abstractmethod
    def read(self, path: str, *, layout: Layout) -> List[DocumentRecord]:
        raise NotImplementedError
