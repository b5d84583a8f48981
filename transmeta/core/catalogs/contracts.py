from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .capabilities import ReaderCapabilities
from .file_info import FileInfo


@dataclass(frozen=True)
class ReaderMetadata:
    """
    Immutable description of a catalog reader.
    """
    reader_id: str                 # Unique identifier
    name: str                      # Human-readable name
    version: str                   # Reader version
    catalog_format: str            # "mo" | "po" | "json"


@dataclass(frozen=True)
class CatalogHeaders:
    """Raw header mapping read from one catalog file.

    `headers` is the unreconciled reader output; feed it to
    transmeta.core.metadata.reconcile.
    """

    reader_id: str
    catalog_format: str
    path: str
    headers: Dict[str, Any] = field(default_factory=dict)
    note: Optional[str] = None


@runtime_checkable
class CatalogReader(Protocol):
    """Contract for turning a catalog file into raw headers.

    Readers must bound how much of a file they read and must not raise for
    malformed content: they return empty headers and a note instead.
    """

    @property
    def metadata(self) -> ReaderMetadata: ...

    @property
    def capabilities(self) -> ReaderCapabilities: ...

    def can_handle_file(self, info: FileInfo) -> bool: ...

    def match_score_file(self, info: FileInfo) -> int:
        """Relative score for this file; higher wins. Must not read the file."""
        ...

    def read_headers(self, path: str) -> CatalogHeaders: ...
