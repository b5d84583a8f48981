from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Union

HeaderValue = Union[str, bool, int, float, None]


class FileInfoOut(BaseModel):
    """Sniffed summary of an uploaded catalog."""

    filename: str
    extension: Optional[str] = None
    mime_type: Optional[str] = None
    mime_confidence: Optional[str] = None
    size_bytes: int


class NormalizeIn(BaseModel):
    """Raw headers to reconcile."""

    headers: Dict[str, HeaderValue] = Field(default_factory=dict)


class NormalizeOut(BaseModel):
    """Reconciled header map."""

    headers: Dict[str, str]


class InspectOut(BaseModel):
    """Catalog inspection: raw reader output plus the reconciled headers."""

    file: FileInfoOut
    reader_id: str
    catalog_format: str
    raw_headers: Dict[str, HeaderValue] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    note: Optional[str] = None


class UpdateRecordOut(BaseModel):
    """Language-pack update feed entry."""

    type: str
    slug: str
    language: str
    version: str
    updated: str
    package: str
    autoupdate: bool


class ReaderOut(BaseModel):
    reader_id: str
    name: str
    version: str
    catalog_format: str


class TranslationOut(BaseModel):
    """A translation held in the service registry."""

    handle: str
    text_domain: str
    kind: str
    locale: str
    reader_id: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)


class TranslationListOut(BaseModel):
    text_domain: str
    translations: List[TranslationOut] = Field(default_factory=list)
