"""Tests for security header analysis."""

import httpx

from ripscanner.checkers.security_headers import analyze_headers, MISSING, INSECURE
from ripscanner.checkers.sensitive_files import classify_path, SENSITIVE_PATHS
from ripscanner.checkers.robots import discloses_structure
from ripscanner.core.models import Severity

BASE = "https://example.com"

ALL_HEADERS = {
    "X-Frame-Options": "SAMEORIGIN",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=63072000",
    "Content-Security-Policy": "default-src 'self'",
    "Referrer-Policy": "no-referrer",
}


class TestAnalyzeHeaders:
    """Test missing/insecure header detection."""

    def test_missing_all(self):
        """Test an empty header map gives 1 High and 5 Medium findings."""
        findings = analyze_headers({}, BASE)

        assert len(findings) == 6
        assert all(f.vulnerability_type == MISSING for f in findings)
        severities = [f.severity for f in findings]
        assert severities.count(Severity.HIGH) == 1
        assert severities.count(Severity.MEDIUM) == 5

        hsts = next(f for f in findings if "strict-transport-security" in f.description)
        assert hsts.severity == Severity.HIGH
        xfo = next(f for f in findings if "x-frame-options" in f.description)
        assert xfo.severity == Severity.MEDIUM

    def test_some_present(self):
        """Test present headers aren't reported."""
        findings = analyze_headers(
            {"x-frame-options": "SAMEORIGIN", "x-content-type-options": "nosniff"}, BASE)

        assert len(findings) == 4
        assert not any("x-frame-options" in f.description for f in findings)
        assert not any("x-content-type-options" in f.description for f in findings)

    def test_insecure_xfo(self):
        """Test ALLOWALL adds an insecure finding and is not counted as missing."""
        findings = analyze_headers({"x-frame-options": "ALLOWALL"}, BASE)

        assert len(findings) == 6
        insecure = [f for f in findings if f.vulnerability_type == INSECURE]
        assert len(insecure) == 1
        assert insecure[0].severity == Severity.HIGH
        assert "X-Frame-Options set to ALLOWALL" in insecure[0].description
        assert sum(f.vulnerability_type == MISSING for f in findings) == 5

    def test_insecure_xfo_case_insensitive_value(self):
        """Test the ALLOWALL comparison ignores case."""
        headers = dict(ALL_HEADERS, **{"X-Frame-Options": "AllowAll"})
        findings = analyze_headers(headers, BASE)
        assert [f.vulnerability_type for f in findings] == [INSECURE]

    def test_all_present(self):
        """Test mixed-case names all count as present."""
        assert analyze_headers(ALL_HEADERS, BASE) == []

    def test_httpx_headers(self):
        """Test an httpx.Headers object works as input."""
        assert analyze_headers(httpx.Headers(ALL_HEADERS), BASE) == []

    def test_findings_use_base_url(self):
        """Test every finding points at the base URL."""
        assert {f.url for f in analyze_headers({}, BASE)} == {BASE}

    def test_deterministic(self):
        """Test the same input always gives the same output."""
        assert analyze_headers({}, BASE) == analyze_headers({}, BASE)


class TestClassifyPath:
    """Test severity classification for sensitive paths."""

    def test_critical(self):
        for path in ("/.env", "/.git/config", "/.git/HEAD", "/config.php", "/wp-config.php"):
            assert classify_path(path) == Severity.CRITICAL, path

    def test_high(self):
        for path in ("/backup.sql", "/database.sql", "/admin", "/phpmyadmin"):
            assert classify_path(path) == Severity.HIGH, path

    def test_medium(self):
        for path in ("/debug", "/test"):
            assert classify_path(path) == Severity.MEDIUM, path

    def test_low(self):
        for path in ("/.htaccess", "/robots.txt", "/sitemap.xml",
                     "/crossdomain.xml", "/clientaccesspolicy.xml"):
            assert classify_path(path) == Severity.LOW, path

    def test_checklist_size(self):
        assert len(SENSITIVE_PATHS) == 16


class TestRobots:
    """Test robots.txt heuristics."""

    def test_short_clean_file(self):
        assert not discloses_structure("User-agent: *\nDisallow: /tmp\n")

    def test_mentions_admin(self):
        assert discloses_structure("User-agent: *\nDisallow: /admin\n")

    def test_mentions_private(self):
        assert discloses_structure("Disallow: /private/\n")

    def test_long_file(self):
        content = "\n".join(f"Disallow: /p{i}" for i in range(11))
        assert discloses_structure(content)

    def test_exactly_ten_lines(self):
        content = "\n".join(f"Disallow: /p{i}" for i in range(10))
        assert not discloses_structure(content)
