from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from transmeta.core.errors import DuplicateReaderError

from .contracts import CatalogReader


@dataclass
class ReaderRegistry:
    """In-memory registry of catalog readers keyed by reader_id."""

    _readers: Dict[str, CatalogReader] = field(default_factory=dict, init=False, repr=False)

    def register(self, reader: CatalogReader) -> None:
        rid = reader.metadata.reader_id
        if rid in self._readers:
            raise DuplicateReaderError(f"Duplicate reader_id: {rid}")
        self._readers[rid] = reader

    def get(self, reader_id: str) -> CatalogReader:
        return self._readers[reader_id]

    def try_get(self, reader_id: str) -> Optional[CatalogReader]:
        return self._readers.get(reader_id)

    def list_readers(self) -> List[CatalogReader]:
        """List readers in registration order."""
        return list(self._readers.values())

    def iter_readers(self) -> Iterable[CatalogReader]:
        return self._readers.values()
