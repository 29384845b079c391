"""Tests for document label lookup."""

from bizdesk.core.domain_types import Language
from bizdesk.core.translations import translator


def test_hebrew_label():
    assert translator("he")("receipt") == "קבלה"


def test_missing_label_falls_back_to_english():
    assert translator(Language.AR)("general_bill") == "General Bill"
    assert translator("he")("no_description") == "No description"


def test_unknown_key_returns_key():
    assert translator("en")("no_such_label") == "no_such_label"


def test_rtl_languages():
    assert Language.HE.is_rtl
    assert Language.AR.is_rtl
    assert not Language.EN.is_rtl
