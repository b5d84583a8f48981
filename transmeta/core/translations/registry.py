from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .translation import Translation

LocaleEntries = Dict[str, Translation]
DomainEntries = Dict[str, LocaleEntries]


def translation_handle(translation: Translation) -> str:
    """Identity handle for a stored translation object."""
    return format(id(translation), "x")


@dataclass
class TranslationRegistry:
    """In-memory store of translations: text_domain -> locale -> handle -> Translation.

    The locale key defaults to the translation's normalized Locale header.
    Handles are per-object: storing an equal but distinct Translation gives a
    new handle.
    """

    _translations: Dict[str, DomainEntries] = field(default_factory=dict, init=False, repr=False)

    def _slot(self, translation: Translation, locale: Optional[str]) -> LocaleEntries:
        loc = locale or translation.locale
        return self._translations.setdefault(translation.text_domain, {}).setdefault(loc, {})

    def add(self, translation: Translation, locale: Optional[str] = None) -> Optional[str]:
        """Store a translation unless this object is already stored there.

        Returns the handle, or None if it was already present.
        """
        handle = translation_handle(translation)
        slot = self._slot(translation, locale)
        if handle in slot:
            return None
        slot[handle] = translation
        return handle

    def set(self, translation: Translation, locale: Optional[str] = None) -> str:
        """Store or replace a translation and return its handle."""
        handle = translation_handle(translation)
        self._slot(translation, locale)[handle] = translation
        return handle

    def remove(self, text_domain: str, locale: Optional[str] = None, handle: Optional[str] = None) -> None:
        """Remove a whole domain, one locale of it, or a single entry."""
        domain = self._translations.get(text_domain)
        if domain is None:
            return
        if not locale:
            del self._translations[text_domain]
            return
        if not handle:
            domain.pop(locale, None)
            return
        entries = domain.get(locale)
        if entries is not None:
            entries.pop(handle, None)

    def get(
        self,
        text_domain: str,
        locale: Optional[str] = None,
        handle: Optional[str] = None,
    ) -> Union[None, Translation, LocaleEntries, DomainEntries]:
        """Return the domain mapping, one locale's entries, or one translation."""
        domain = self._translations.get(text_domain)
        if domain is None:
            return None
        if not locale:
            return domain
        entries = domain.get(locale)
        if entries is None:
            return None
        if not handle:
            return entries
        return entries.get(handle)

    def all(self) -> Dict[str, DomainEntries]:
        return self._translations
