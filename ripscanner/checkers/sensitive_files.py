"""Exposed sensitive files: env files, VCS metadata, dumps, admin/debug pages."""

from typing import List

import httpx

from ripscanner.checkers.base import BaseChecker
from ripscanner.core.models import Severity, WebVulnerability

SENSITIVE_PATHS = [
    "/.env",
    "/.git/config",
    "/.git/HEAD",
    "/backup.sql",
    "/database.sql",
    "/config.php",
    "/wp-config.php",
    "/admin",
    "/phpmyadmin",
    "/debug",
    "/test",
    "/.htaccess",
    "/robots.txt",
    "/sitemap.xml",
    "/crossdomain.xml",
    "/clientaccesspolicy.xml",
]

# Checked top to bottom; first keyword found wins
_SEVERITY_KEYWORDS = [
    (Severity.CRITICAL, (".env", ".git", "config")),
    (Severity.HIGH, ("backup", "database", "admin")),
    (Severity.MEDIUM, ("debug", "test")),
]


def classify_path(path: str) -> Severity:
    for severity, keywords in _SEVERITY_KEYWORDS:
        if any(k in path for k in keywords):
            return severity
    return Severity.LOW


class SensitiveFiles(BaseChecker):

    name = "Exposed Sensitive File"
    counts_endpoints = True

    def __init__(self, paths: List[str] | None = None):
        self.paths = list(SENSITIVE_PATHS if paths is None else paths)

    def get_paths(self) -> List[str]:
        return self.paths

    def check(self, url: str, path: str, response: httpx.Response) -> List[WebVulnerability]:
        if not response.is_success:
            return []
        return [WebVulnerability(
            url=url,
            vulnerability_type=self.name,
            severity=classify_path(path),
            description=f"Sensitive file accessible at {path}",
            recommendation="Remove or restrict access to this file",
        )]
