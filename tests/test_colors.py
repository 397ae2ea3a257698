"""Tests for color assignment and contrast."""

import pytest

from teamline.colors import DEFAULT_PALETTE, ColorAssigner, contrast_text_color


class TestColorAssigner:
    """Test stable palette assignment."""

    def test_same_identifier_same_color(self) -> None:
        assigner = ColorAssigner()
        first = assigner.color_for("ACME")
        assigner.color_for("Globex")
        assert assigner.color_for("ACME") == first

    def test_palette_order(self) -> None:
        assigner = ColorAssigner(["#111111", "#222222"])
        assert assigner.color_for("a") == "#111111"
        assert assigner.color_for("b") == "#222222"

    def test_wraps_around_palette(self) -> None:
        assigner = ColorAssigner()
        colors = [assigner.color_for(f"id-{n}") for n in range(len(DEFAULT_PALETTE) + 1)]
        assert colors[: len(DEFAULT_PALETTE)] == list(DEFAULT_PALETTE)
        assert colors[-1] == DEFAULT_PALETTE[0]
        assert len(assigner) == len(DEFAULT_PALETTE) + 1

    def test_separate_assigners_are_independent(self) -> None:
        one = ColorAssigner()
        two = ColorAssigner()
        one.color_for("x")
        one.color_for("y")
        assert two.color_for("y") == DEFAULT_PALETTE[0]

    def test_assignments_is_a_copy(self) -> None:
        assigner = ColorAssigner()
        assigner.color_for("x")
        snapshot = assigner.assignments()
        snapshot["y"] = "#000000"
        assert assigner.assignments() == {"x": DEFAULT_PALETTE[0]}

    def test_empty_palette_rejected(self) -> None:
        with pytest.raises(ValueError, match="palette"):
            ColorAssigner([])


class TestContrastTextColor:
    """Test readable text color selection."""

    @pytest.mark.parametrize("bg", ["#8b0000", "#2f75b5", "#000000", "#4a4e69"])
    def test_dark_backgrounds_get_white(self, bg: str) -> None:
        assert contrast_text_color(bg) == "#ffffff"

    @pytest.mark.parametrize("bg", ["#D3D3D3", "#ffffff", "#ADD8E6", "#fff"])
    def test_light_backgrounds_get_black(self, bg: str) -> None:
        assert contrast_text_color(bg) == "#000000"

    @pytest.mark.parametrize("bg", ["red", "#12", "#gggggg"])
    def test_unparseable_gets_black(self, bg: str) -> None:
        assert contrast_text_color(bg) == "#000000"
