"""robots.txt information disclosure."""

from typing import List

import httpx

from ripscanner.checkers.base import BaseChecker
from ripscanner.core.models import Severity, WebVulnerability

MAX_LINES = 10
_TELLTALES = ("admin", "private")


def discloses_structure(content: str) -> bool:
    return len(content.splitlines()) > MAX_LINES or any(t in content for t in _TELLTALES)


class Robots(BaseChecker):

    name = "Information Disclosure"

    def get_paths(self) -> List[str]:
        return ["/robots.txt"]

    def check(self, url: str, path: str, response: httpx.Response) -> List[WebVulnerability]:
        if not response.is_success or not discloses_structure(response.text or ""):
            return []
        return [WebVulnerability(
            url=url,
            vulnerability_type=self.name,
            severity=Severity.LOW,
            description="Robots.txt reveals potentially sensitive directory structure",
            recommendation="Review robots.txt for sensitive path disclosure",
        )]
