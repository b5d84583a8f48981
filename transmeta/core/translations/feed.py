from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .translation import Translation

PACKAGE_SUFFIX = ".zip"


@dataclass(frozen=True)
class UpdateRecord:
    """Flattened translation entry for a language-pack update feed."""

    type: str
    slug: str
    language: str
    version: str
    updated: str
    package: str
    autoupdate: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_update_record(translation: Translation, slug: str) -> UpdateRecord:
    """Build the update-feed record for a translation.

    `package` is kept only when it names a .zip archive; `autoupdate` is True
    only for the literal header value "true".
    """

    package = translation.get("Package")
    if not package.endswith(PACKAGE_SUFFIX):
        package = ""

    md = translation.metadata
    return UpdateRecord(
        type=translation.kind.value,
        slug=slug,
        language=md.locale,
        version=md.project_id_version,
        updated=md.po_revision_date,
        package=package,
        autoupdate=translation.get("Autoupdate") == "true",
    )
