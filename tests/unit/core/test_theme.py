"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
from bagpack.core.theme import (
    ThemeColors,
    _parse_colors,
    get_rich_theme,
    get_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.status_outdated == "#f97316"
        assert colors.status_unknown == "#a1a1aa"

    def test_short_hex_accepted(self) -> None:
        """ThemeColors accepts #RGB codes."""
        assert ThemeColors(muted="#abc").muted == "#abc"

    def test_surrounding_whitespace_trimmed(self) -> None:
        """Colors are stripped before validation."""
        assert ThemeColors(text=" #000000 ").text == "#000000"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(status_current="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestParseColors:
    """Tests for _parse_colors."""

    def test_reads_colors_table(self) -> None:
        """The [colors] table is returned."""
        text = '[colors]\nstatus_outdated = "#ff0000"\n'
        assert _parse_colors(text, "test") == {"status_outdated": "#ff0000"}

    def test_invalid_toml_is_empty(self) -> None:
        """Malformed TOML yields no colors."""
        assert _parse_colors("not valid [ toml syntax", "test") == {}

    def test_missing_table_is_empty(self) -> None:
        """A document without [colors] yields no colors."""
        assert _parse_colors('[other]\nkey = "value"\n', "test") == {}

    def test_non_table_colors_is_empty(self) -> None:
        """A scalar 'colors' key is ignored."""
        assert _parse_colors('colors = "red"\n', "test") == {}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_loads_bundled_theme(self, tmp_path: Path) -> None:
        """Loads theme from bundled data file."""
        with patch(
            "bagpack.core.theme.get_user_theme_path",
            return_value=tmp_path / "missing.toml",
        ):
            colors = load_theme()

        assert colors.header == "#7de5ff"
        assert colors.status_outdated == "#f97316"

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User theme overrides bundled theme values."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nstatus_unknown = "#333333"\n')

        with patch("bagpack.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.status_unknown == "#333333"
        assert colors.status_current == "#7de5ff"

    def test_malformed_user_theme_ignored(self, tmp_path: Path) -> None:
        """A user theme that is not valid TOML keeps the bundled colors."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text("invalid toml [[[")

        with patch("bagpack.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.header == "#7de5ff"

    def test_invalid_user_colors_fall_back(self, tmp_path: Path) -> None:
        """An invalid color in the user theme falls back to defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nerror = "red"\n')

        with patch("bagpack.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_includes_status_styles(self) -> None:
        """Theme includes one style per package status."""
        theme = get_rich_theme(ThemeColors())

        for name in ("status.current", "status.outdated", "status.unknown"):
            assert name in theme.styles

    def test_bold_modifiers(self) -> None:
        """Outdated packages and errors are rendered bold."""
        theme = get_rich_theme(ThemeColors())

        assert theme.styles["status.outdated"].bold is True
        assert not theme.styles["status.current"].bold

    def test_uses_provided_colors(self) -> None:
        """Styles take their colors from the given ThemeColors."""
        theme = get_rich_theme(ThemeColors(status_unknown="#123456"))

        color = theme.styles["status.unknown"].color
        assert color is not None
        assert color.triplet is not None
        assert color.triplet.hex == "#123456"


class TestGetTheme:
    """Tests for get_theme caching function."""

    def test_caches_theme(self) -> None:
        """get_theme returns cached instance on subsequent calls."""
        get_theme.cache_clear()

        theme1 = get_theme()
        theme2 = get_theme()

        assert isinstance(theme1, Theme)
        assert theme1 is theme2
