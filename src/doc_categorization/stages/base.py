"""Stage plugin interface.

Stages must:
- accept a DocumentRecord
- return a Decision (accept/reject + reason)
- optionally mutate/enrich the record in place

Parse stages run right after a document is parsed; words stages run on
records read back from the intermediate file.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from ..pipeline.context import DocumentRecord, Decision

class Stage(ABC):
    name: str = "stage"
    layer: str = "words"

    @abstractmethod
    def apply(self, record: DocumentRecord) -> Decision:
        ...
