"""Tests for message lookup and language names."""

from __future__ import annotations

import pytest

from vidchat.localization import (
    MESSAGES,
    SUPPORTED_LOCALES,
    get_language_name,
    get_message,
    normalize_locale,
)


class TestGetMessage:
    def test_interpolates_params(self) -> None:
        assert get_message("error_general", "en", {"error": "boom"}) == "Error: boom"

    def test_other_locale(self) -> None:
        assert get_message("chat_goodbye", "es") == "¡Hasta luego!"

    def test_unknown_locale_falls_back_to_english(self) -> None:
        assert get_message("chat_goodbye", "tlh") == "Goodbye!"

    def test_unknown_key_returns_key(self) -> None:
        assert get_message("does_not_exist", "en") == "does_not_exist"

    def test_missing_param_keeps_placeholder(self) -> None:
        assert get_message("video_info_title", "en", {}) == "Title: {title}"
        assert get_message("video_info_title", "en", {"other": 1}) == "Title: {title}"

    def test_region_suffix_ignored(self) -> None:
        assert get_message("chat_goodbye", "fr-CA") == "Au revoir !"
        assert get_message("chat_goodbye", "de_AT") == "Auf Wiedersehen!"

    def test_braces_in_param_values_are_literal(self) -> None:
        assert get_message("error_general", "en", {"error": "{not a field}"}) == "Error: {not a field}"


class TestCatalog:
    @pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
    def test_every_locale_has_every_key(self, locale: str) -> None:
        assert set(MESSAGES[locale]) == set(MESSAGES["en"])


class TestNormalizeLocale:
    @pytest.mark.parametrize(
        "value, expected",
        [(None, "en"), ("", "en"), ("ES", "es"), ("pt-BR", "en"), ("de-DE", "de")],
    )
    def test_normalize(self, value, expected) -> None:
        assert normalize_locale(value) == expected


class TestLanguageName:
    def test_known(self) -> None:
        assert get_language_name("ja") == "日本語"

    def test_region_variant(self) -> None:
        assert get_language_name("en-US") == "English"

    def test_unknown_returns_code(self) -> None:
        assert get_language_name("xx") == "xx"

    def test_empty(self) -> None:
        assert get_language_name("") == ""
