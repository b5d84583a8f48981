from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from transmeta.core.catalogs import ReaderRegistry, load_builtin_readers, select_catalog_reader
from transmeta.core.metadata import MetadataHolder

log = logging.getLogger("transmeta.translations")

DEFAULT_TEXT_DOMAIN = "default"


class TranslationKind(str, Enum):
    """What a translation belongs to."""

    FILE = "file"
    THEME = "theme"
    PLUGIN = "plugin"


@dataclass(frozen=True)
class Translation:
    """A translation source with its reconciled header metadata.

    Header access goes through `metadata` (a MetadataHolder); `locale` and
    `get()` are explicit shortcuts onto it.
    """

    text_domain: str = DEFAULT_TEXT_DOMAIN
    kind: TranslationKind = TranslationKind.FILE
    metadata: MetadataHolder = field(default_factory=MetadataHolder)
    source_path: Optional[str] = None
    reader_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.text_domain:
            object.__setattr__(self, "text_domain", DEFAULT_TEXT_DOMAIN)
        object.__setattr__(self, "kind", TranslationKind(self.kind))

    @classmethod
    def from_headers(
        cls,
        raw: Mapping[Any, Any],
        *,
        text_domain: str = DEFAULT_TEXT_DOMAIN,
        kind: TranslationKind | str = TranslationKind.FILE,
    ) -> "Translation":
        return cls(
            text_domain=text_domain,
            kind=TranslationKind(kind),
            metadata=MetadataHolder.from_raw(raw),
        )

    @classmethod
    def from_file(
        cls,
        path: str,
        *,
        text_domain: str = DEFAULT_TEXT_DOMAIN,
        kind: TranslationKind | str = TranslationKind.FILE,
        registry: Optional[ReaderRegistry] = None,
    ) -> "Translation":
        """Read a .mo / .po / .json catalog and reconcile its headers.

        A path that is not a regular file gives a translation whose headers
        are all empty. Reader selection failures propagate.

        """

        abs_path = os.path.abspath(path)
        if not os.path.isfile(abs_path):
            log.info("catalog %s not found; using empty headers", abs_path)
            return cls(text_domain=text_domain, kind=TranslationKind(kind), source_path=abs_path)

        if registry is None:
            registry = ReaderRegistry()
            load_builtin_readers(registry)

        reader = select_catalog_reader(registry, abs_path)
        result = reader.read_headers(abs_path)
        if result.note:
            log.info("%s: %s", abs_path, result.note)

        return cls(
            text_domain=text_domain,
            kind=TranslationKind(kind),
            metadata=MetadataHolder.from_raw(result.headers),
            source_path=abs_path,
            reader_id=result.reader_id,
        )

    @property
    def locale(self) -> str:
        return self.metadata.locale

    def get(self, name: str) -> str:
        return self.metadata.get(name)
