"""Localized configuration strings such as ``sidebar`` / ``sidebar[de]``."""

from __future__ import annotations

import re
from typing import Any, Mapping

from PySide6.QtCore import QCoreApplication, QLocale

_LOCALIZED_KEY_RE = re.compile(r"^(?P<key>[^\[\]]+)\[(?P<locale>[^\[\]]+)\]$")


def _candidate_locales(locale: str) -> list[str]:
    """Return ``de_AT@euro``, ``de_AT``, ``de`` style fallbacks for a locale."""
    candidates: list[str] = []
    current = locale
    for separator in ("@", ".", "_"):
        if current and current not in candidates:
            candidates.append(current)
        current = current.split(separator, 1)[0]
    if current and current not in candidates:
        candidates.append(current)
    return candidates


class TranslatedString:
    """A configuration string with per-locale overrides.

    Built from a mapping that holds ``key`` and optional ``key[locale]``
    entries. When no entry matches, the untranslated value is passed through
    Qt's translator under ``context``.
    """

    def __init__(self, mapping: Mapping[str, Any], key: str, context: str) -> None:
        self._key = key
        self._context = context
        self._default = ""
        self._strings: dict[str, str] = {}
        for raw_key, value in mapping.items():
            if value is None:
                continue
            if raw_key == key:
                self._default = str(value)
                continue
            match = _LOCALIZED_KEY_RE.match(str(raw_key))
            if match and match.group("key") == key:
                self._strings[match.group("locale")] = str(value)

    @property
    def key(self) -> str:
        return self._key

    def locales(self) -> list[str]:
        return sorted(self._strings)

    def get(self, locale: str | None = None) -> str:
        """Return the string for ``locale``, defaulting to the system locale."""
        if locale is None:
            locale = QLocale.system().name()
        for candidate in _candidate_locales(locale):
            if candidate in self._strings:
                return self._strings[candidate]
        if not self._default:
            return ""
        return QCoreApplication.translate(self._context, self._default)

    def __repr__(self) -> str:
        return f"TranslatedString(key={self._key!r}, locales={self.locales()!r})"


def has_localized_key(mapping: Mapping[str, Any], key: str) -> bool:
    """Return True when ``mapping`` holds ``key`` or any ``key[locale]`` entry."""
    for raw_key in mapping:
        if raw_key == key:
            return True
        match = _LOCALIZED_KEY_RE.match(str(raw_key))
        if match and match.group("key") == key:
            return True
    return False
