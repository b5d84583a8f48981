from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .keys import DEFAULT_METADATA, canonicalize_key
from .reconciler import HeaderMap, reconcile


@dataclass(frozen=True)
class MetadataHolder:
    """Read-only accessor over a reconciled HeaderMap.

    Invariants
    - `headers` always contains every canonical key (possibly "").
    - The mapping is never mutated after construction.
    """

    headers: HeaderMap = field(default_factory=lambda: reconcile({}))

    @classmethod
    def from_raw(cls, raw: Mapping[Any, Any]) -> "MetadataHolder":
        return cls(headers=reconcile(raw))

    def get(self, name: str) -> str:
        """Look up a header by any spelling; unknown headers return ""."""
        if name in self.headers:
            return self.headers[name]
        return self.headers.get(canonicalize_key(name), "")

    def as_dict(self) -> Dict[str, str]:
        return dict(self.headers)

    @staticmethod
    def defaults() -> Dict[str, str]:
        return dict(DEFAULT_METADATA)

    @property
    def pot_creation_date(self) -> str:
        return self.get("POT-Creation-Date")

    @property
    def po_revision_date(self) -> str:
        return self.get("PO-Revision-Date")

    @property
    def creation_date(self) -> str:
        return self.get("Creation-Date")

    @property
    def revision_date(self) -> str:
        return self.get("Revision-Date")

    @property
    def project_id_version(self) -> str:
        return self.get("Project-Id-Version")

    @property
    def version(self) -> str:
        return self.get("Version")

    @property
    def x_generator(self) -> str:
        return self.get("X-Generator")

    @property
    def generator(self) -> str:
        return self.get("Generator")

    @property
    def language(self) -> str:
        return self.get("Language")

    @property
    def locale(self) -> str:
        return self.get("Locale")

    @property
    def language_team(self) -> str:
        return self.get("Language-Team")

    @property
    def team(self) -> str:
        return self.get("Team")
