"""Tests for pattern set resolution."""

from ripscanner.core.models import PatternSpec
from ripscanner.core.patterns import FALLBACK_CHECKLIST, resolve_patterns


class TestResolvePatterns:
    """Test configured vs fallback patterns."""

    def test_configured_pairs(self):
        """Test configured pairs become the pattern set as-is."""
        patterns, fallback = resolve_patterns([("API_KEY", "secret123"), ("DB", "pw")])
        assert not fallback
        assert patterns == [PatternSpec("API_KEY", "secret123"), PatternSpec("DB", "pw")]

    def test_empty_pairs_fall_back(self):
        """Test the built-in checklist is used with nothing configured."""
        patterns, fallback = resolve_patterns([])
        assert fallback
        assert len(patterns) == len(FALLBACK_CHECKLIST) == 16
        assert all(p.literal for p in patterns)

    def test_fallback_has_common_prefixes(self):
        """Test well-known vendor prefixes are in the checklist."""
        literals = {literal for _, literal in FALLBACK_CHECKLIST}
        assert {"sk_live_", "ghp_", "AKIA", "Bearer "} <= literals

    def test_empty_values_skipped(self):
        """Test pairs with empty values don't produce patterns."""
        patterns, fallback = resolve_patterns([("A", ""), ("B", "value")])
        assert not fallback
        assert [p.key for p in patterns] == ["B"]
