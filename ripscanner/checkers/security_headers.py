"""Security header analysis: missing or insecurely configured response headers."""

from typing import List, Mapping

import httpx

from ripscanner.checkers.base import BaseChecker
from ripscanner.core.models import Severity, WebVulnerability

# header name → what it protects against
SECURITY_HEADERS = [
    ("x-frame-options", "Clickjacking protection"),
    ("x-content-type-options", "MIME type sniffing protection"),
    ("x-xss-protection", "XSS protection"),
    ("strict-transport-security", "HTTPS enforcement"),
    ("content-security-policy", "Content Security Policy"),
    ("referrer-policy", "Referrer information control"),
]

MISSING = "Missing Security Header"
INSECURE = "Insecure Header Configuration"


def analyze_headers(headers: Mapping[str, str], base_url: str) -> List[WebVulnerability]:
    """
    Pure check of response *headers* (names compared case-insensitively).

    One finding per missing header: High for HSTS, Medium for the rest.
    ``X-Frame-Options: ALLOWALL`` adds a High insecure-configuration finding;
    a present header is never reported as missing.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    findings: List[WebVulnerability] = []

    for header, purpose in SECURITY_HEADERS:
        if header in lowered:
            continue
        severity = Severity.HIGH if header == "strict-transport-security" else Severity.MEDIUM
        findings.append(WebVulnerability(
            url=base_url,
            vulnerability_type=MISSING,
            severity=severity,
            description=f"Missing {header} header",
            recommendation=f"Add {header} header for {purpose}",
        ))

    xfo = lowered.get("x-frame-options")
    if xfo is not None and xfo.strip().lower() == "allowall":
        findings.append(WebVulnerability(
            url=base_url,
            vulnerability_type=INSECURE,
            severity=Severity.HIGH,
            description="X-Frame-Options set to ALLOWALL",
            recommendation="Set X-Frame-Options to DENY or SAMEORIGIN",
        ))

    return findings


class SecurityHeaders(BaseChecker):

    name = "Security Headers"

    def get_paths(self) -> List[str]:
        return [""]

    def check(self, url: str, path: str, response: httpx.Response) -> List[WebVulnerability]:
        return analyze_headers(response.headers, url)
