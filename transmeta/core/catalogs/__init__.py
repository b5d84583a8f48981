from .capabilities import ReaderCapabilities
from .contracts import CatalogHeaders, CatalogReader, ReaderMetadata
from .file_info import FileInfo, sniff_file_info
from .loader import load_builtin_readers
from .registry import ReaderRegistry
from .selectors import select_catalog_reader

__all__ = [
    "ReaderMetadata",
    "CatalogReader",
    "CatalogHeaders",
    "ReaderCapabilities",
    "ReaderRegistry",
    "load_builtin_readers",
    "FileInfo",
    "sniff_file_info",
    "select_catalog_reader",
]
