"""Redaction of secrets in line content before it is logged or displayed.

Rules run in order, each one on the output of the previous one. Specific
forms (``key=value``, ``Bearer ...``, vendor prefixes) come before the generic
hex catch-all. Every rule keeps the key name / prefix and separator and only
swaps the secret itself for ``REDACTED``. The ``key=value`` rules do match an
already masked ``password=[REDACTED]``, but they rewrite it to the same text.
The bearer, vendor and hex rules can't match it, since ``[`` is outside their
value classes. Running the pipeline twice therefore changes nothing.
"""

import re
from dataclasses import dataclass
from typing import List

REDACTED = "[REDACTED]"

DISPLAY_LIMIT = 100
ELLIPSIS = "..."

# Value part of a key=value assignment. A following "Bearer <tok>" is left to
# the bearer rule so the token itself gets masked rather than the word.
_VALUE = r"(?![Bb][Ee][Aa][Rr][Ee][Rr]\s)[^\s\"',;]+"
_SEP = r"\s*[=:]\s*[\"']?"


def _key_value(name: str) -> str:
    return rf"(?i)(\b[\w-]*?{name}[\"']?)({_SEP})({_VALUE})"


@dataclass(frozen=True)
class MaskingRule:
    name: str
    pattern: re.Pattern
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, replacement: str) -> MaskingRule:
    return MaskingRule(name, re.compile(pattern), replacement)


MASKING_RULES: List[MaskingRule] = [
    _rule("api_key", _key_value(r"api[_-]?key"), rf"\1\2{REDACTED}"),
    _rule("secret_key", _key_value(r"secret[_-]?key"), rf"\1\2{REDACTED}"),
    _rule("password", _key_value(r"password"), rf"\1\2{REDACTED}"),
    _rule("token", _key_value(r"token"), rf"\1\2{REDACTED}"),
    _rule("bearer", r"(?i)\b(bearer)(\s+)([A-Za-z0-9\-._~+/]+=*)", rf"\1\2{REDACTED}"),
    _rule("stripe", r"\b((?:sk|pk|rk)_(?:live_|test_)?)([A-Za-z0-9_]{8,})", rf"\1{REDACTED}"),
    _rule("github", r"\b(gh[pousr]_|github_pat_)([A-Za-z0-9_]{16,})", rf"\1{REDACTED}"),
    _rule("aws", r"\b(AKIA|ASIA)([0-9A-Z]{16})\b", rf"\1{REDACTED}"),
    _rule("slack", r"\b(xox[abprs]-)([A-Za-z0-9-]{10,})", rf"\1{REDACTED}"),
    _rule("hex", r"\b[0-9a-fA-F]{32,}\b", REDACTED),
]


def mask_line(text: str, rules: List[MaskingRule] | None = None) -> str:
    """Run *text* through every masking rule, in order."""
    for rule in (MASKING_RULES if rules is None else rules):
        text = rule.apply(text)
    return text


def truncate(text: str, limit: int = DISPLAY_LIMIT) -> str:
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def mask_for_display(line: str) -> str:
    """Masked, trimmed and truncated form used on the terminal."""
    return truncate(mask_line(line.strip()))
