from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from .file_info import FileInfo, mime_matches


@dataclass(frozen=True, slots=True)
class ReaderCapabilities:
    """Declarative filters used to pick a catalog reader.

    Capabilities are hints declared by the reader; selection stays
    deterministic even if a reader misdeclares them.

    """

    supported_mime_types: FrozenSet[str] = field(default_factory=lambda: frozenset({"*"}))
    supported_extensions: FrozenSet[str] = field(default_factory=lambda: frozenset({"*"}))

    # Largest file the reader agrees to open.
    max_size_bytes: Optional[int] = None

    # Added to match_score_file so specific readers win ties.
    priority_bias: int = 0

    def matches(self, info: FileInfo) -> bool:
        if self.max_size_bytes is not None and info.size_bytes > self.max_size_bytes:
            return False

        any_ext = "*" in self.supported_extensions
        any_mime = "*" in self.supported_mime_types or "*/*" in self.supported_mime_types

        ext_ok = any_ext or info.extension.lower() in self.supported_extensions
        mime_ok = any_mime or any(mime_matches(p, info.mime_type) for p in self.supported_mime_types)

        # Extension and mime are alternative signals when both are constrained.
        if not any_ext and not any_mime:
            return ext_ok or mime_ok
        return ext_ok and mime_ok
