"""Tests for core/languages.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from covsync.core.languages import LANGUAGES, detect_language


class TestDetectLanguage:
    """Tests for detect_language."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("a.c", "c"),
            ("inc/a.h", "c"),
            ("a.cpp", "cpp"),
            ("A.CPP", "cpp"),
            ("a.hpp", "cpp"),
            ("a.cc", "cpp"),
            ("Main.java", "java"),
            ("mod.py", "python"),
        ],
    )
    def test_known(self, path: str, expected: str) -> None:
        """Known extensions map to their language id, case-insensitively."""
        assert detect_language(path) == expected

    def test_unknown(self) -> None:
        """Unknown or missing extensions give None."""
        assert detect_language("README") is None
        assert detect_language("notes.txt") is None

    def test_accepts_path(self) -> None:
        """Path objects are accepted."""
        assert detect_language(Path("/repo/src/a.cxx")) == "cpp"


class TestLanguageTable:
    """Tests for the LANGUAGES table."""

    def test_extensions_unique(self) -> None:
        """No extension belongs to two languages."""
        seen: list[str] = []
        for lang in LANGUAGES:
            seen.extend(lang.extensions)
        assert len(seen) == len(set(seen))

    def test_extensions_lowercase_with_dot(self) -> None:
        """Extensions are lowercase and start with a dot."""
        for lang in LANGUAGES:
            for ext in lang.extensions:
                assert ext.startswith(".")
                assert ext == ext.lower()
