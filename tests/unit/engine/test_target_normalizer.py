"""
Tests for target normalization.
"""

import pytest

from web_test_automation.engine.target_normalizer import normalize, TARGET_SUFFIXES


class TestNormalize:
    """Test normalize()."""

    @pytest.mark.parametrize("raw,expected", [
        ("Login button", "Login"),
        ("Products link", "Products"),
        ("email field", "email"),
        ("Search input", "Search"),
        ("Welcome text", "Welcome"),
        ("Search box", "Search"),
        ("Menu element", "Menu"),
    ])
    def test_strips_each_suffix(self, raw, expected):
        """Each known suffix is removed."""
        assert normalize(raw) == expected

    def test_suffix_is_case_insensitive(self):
        """Suffix matching ignores case; the rest keeps its case."""
        assert normalize("Sign In BUTTON") == "Sign In"

    def test_trims_before_and_after(self):
        """Whitespace around the target and before the suffix is trimmed."""
        assert normalize("   Save    button  ") == "Save"

    def test_plain_target_only_trimmed(self):
        """Targets without a suffix are only trimmed."""
        assert normalize("  Products ") == "Products"
        assert normalize("Products") == "Products"

    def test_at_most_one_suffix_removed(self):
        """Stacked suffixes lose only the last one."""
        assert normalize("Save link button") == "Save link"

    def test_suffix_needs_leading_space(self):
        """A word that merely ends with a suffix is left alone."""
        assert normalize("Textbox") == "Textbox"
        assert normalize("Unlink") == "Unlink"

    def test_bare_suffix_word_kept(self):
        """A target that is only the descriptor is not emptied."""
        assert normalize("button") == "button"

    def test_empty_input(self):
        """Empty and blank input normalize to the empty string."""
        assert normalize("") == ""
        assert normalize("   ") == ""

    @pytest.mark.parametrize("raw", ["Login button", "email field", "Products", "  Next link "])
    def test_idempotent_for_single_suffix(self, raw):
        """Normalizing twice changes nothing for single-suffix inputs."""
        once = normalize(raw)
        assert normalize(once) == once

    def test_suffix_order(self):
        """Suffixes are tried in their documented order."""
        assert TARGET_SUFFIXES[0] == " button"
        assert TARGET_SUFFIXES[-1] == " element"
        assert len(TARGET_SUFFIXES) == 7
