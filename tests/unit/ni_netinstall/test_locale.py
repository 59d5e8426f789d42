"""Tests for localized configuration strings."""

from __future__ import annotations

import pytest

from ni_netinstall.locale import TranslatedString, has_localized_key


pytestmark = pytest.mark.unit_netinstall

LABELS = {
    "sidebar": "Software",
    "sidebar[de]": "Anwendungen",
    "sidebar[pt_BR]": "Programas",
    "title": "Pick software",
}


def test_untranslated_default() -> None:
    label = TranslatedString(LABELS, "sidebar", "NetInstallViewStep")

    assert label.get("fr") == "Software"


def test_exact_locale() -> None:
    label = TranslatedString(LABELS, "sidebar", "NetInstallViewStep")

    assert label.get("pt_BR") == "Programas"


def test_language_fallback() -> None:
    label = TranslatedString(LABELS, "sidebar", "NetInstallViewStep")

    assert label.get("de_AT.UTF-8") == "Anwendungen"


def test_only_own_key_is_collected() -> None:
    label = TranslatedString(LABELS, "title", "NetInstallViewStep")

    assert label.locales() == []
    assert label.get("de") == "Pick software"


def test_missing_default_is_empty() -> None:
    label = TranslatedString({"title[de]": "Titel"}, "title", "NetInstallViewStep")

    assert label.get("en") == ""
    assert label.get("de") == "Titel"


def test_has_localized_key() -> None:
    assert has_localized_key(LABELS, "sidebar") is True
    assert has_localized_key({"title[de]": "Titel"}, "title") is True
    assert has_localized_key(LABELS, "missing") is False
