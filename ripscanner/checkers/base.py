"""Abstract base for all web checkers."""

from abc import ABC, abstractmethod
from typing import List

import httpx

from ripscanner.core.models import WebVulnerability


class BaseChecker(ABC):
    """Every checker must implement get_paths() and check()."""

    name: str = "Unnamed Checker"

    # Whether requests made for this checker count towards endpoints_checked
    counts_endpoints: bool = False

    # ── public API ──────────────────────────────────────────────

    @abstractmethod
    def get_paths(self) -> List[str]:
        """Return the relative paths to request ("" is the base URL itself)."""
        ...

    @abstractmethod
    def check(
        self,
        url: str,
        path: str,
        response: httpx.Response,
    ) -> List[WebVulnerability]:
        """
        Inspect the *response* fetched from *url* (built from *path*).
        Return the findings, or an empty list.
        """
        ...

    # ── shared helpers ──────────────────────────────────────────

    @staticmethod
    def join(base_url: str, path: str) -> str:
        if not path:
            return base_url
        return f"{base_url.rstrip('/')}{path}"
