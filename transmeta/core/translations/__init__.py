from .feed import PACKAGE_SUFFIX, UpdateRecord, build_update_record
from .registry import TranslationRegistry, translation_handle
from .translation import DEFAULT_TEXT_DOMAIN, Translation, TranslationKind

__all__ = [
    "DEFAULT_TEXT_DOMAIN",
    "PACKAGE_SUFFIX",
    "Translation",
    "TranslationKind",
    "TranslationRegistry",
    "UpdateRecord",
    "build_update_record",
    "translation_handle",
]
