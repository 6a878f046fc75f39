"""Shared data models for the secret scanner and the web probe."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, FrozenSet

from ripscanner.core.masker import mask_line


class Severity(Enum):
    """Web finding severity. Ordering comes from rank(), not declaration order."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank() < other.rank()

    def __str__(self):
        return self.value


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}

# Display order for reports: highest first
SEVERITY_ORDER = sorted(Severity, key=Severity.rank, reverse=True)


@dataclass(frozen=True)
class ScanTarget:
    """What to walk: root directory, extension allow-list, ignore deny-list."""
    root: Path
    extensions: FrozenSet[str]
    ignore_patterns: FrozenSet[str]


@dataclass(frozen=True)
class PatternSpec:
    """A literal secret value to look for, labelled with its key."""
    key: str
    literal: str

    def __post_init__(self):
        if not self.literal:
            raise ValueError(f"Pattern {self.key!r} has an empty literal")


@dataclass(frozen=True)
class Match:
    """One line of one file containing one pattern."""
    file_path: Path
    line_number: int       # 1-based
    line_content: str      # raw line, untrimmed
    key: str

    def __str__(self):
        return f"{self.file_path}:{self.line_number} [{self.key}]"


@dataclass
class ScanReport:
    matches: List[Match] = field(default_factory=list)
    files_scanned: int = 0
    duration: float = 0.0  # seconds
    log_path: Path | None = None
    fallback_mode: bool = False

    def to_dict(self) -> dict:
        return {
            "files_scanned": self.files_scanned,
            "duration": round(self.duration, 3),
            "log_path": str(self.log_path) if self.log_path else None,
            "fallback_mode": self.fallback_mode,
            "total_matches": len(self.matches),
            "matches": [
                {
                    "file": str(m.file_path),
                    "line": m.line_number,
                    "key": m.key,
                    "content": mask_line(m.line_content.strip()),
                }
                for m in self.matches
            ],
        }


@dataclass(frozen=True)
class WebVulnerability:
    """A single web finding."""
    url: str
    vulnerability_type: str
    severity: Severity
    description: str
    recommendation: str

    def __str__(self):
        return f"[{self.severity.value.upper()}] {self.vulnerability_type} @ {self.url}"

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "vulnerability_type": self.vulnerability_type,
            "severity": self.severity.value,
            "description": self.description,
            "recommendation": self.recommendation,
        }


@dataclass
class WebReport:
    base_url: str
    vulnerabilities: List[WebVulnerability] = field(default_factory=list)
    endpoints_checked: int = 0

    def to_dict(self) -> dict:
        return {
            "base_url": self.base_url,
            "endpoints_checked": self.endpoints_checked,
            "total_vulnerabilities": len(self.vulnerabilities),
            "vulnerabilities": [v.to_dict() for v in self.vulnerabilities],
        }
