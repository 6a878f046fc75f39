import re
import time
from pathlib import Path
from typing import List, Sequence

import httpx
from tqdm import tqdm

from ripscanner.checkers.base import BaseChecker
from ripscanner.checkers.robots import Robots
from ripscanner.checkers.security_headers import SecurityHeaders
from ripscanner.checkers.sensitive_files import SensitiveFiles
from ripscanner.core.collector import collect_files
from ripscanner.core.config import Config
from ripscanner.core.errors import (
    RecoverableNetworkError, RecoverablePatternError, policy_for, SKIP,
)
from ripscanner.core.logfile import LogWriter
from ripscanner.core.models import (
    Match, PatternSpec, ScanReport, ScanTarget, WebReport, WebVulnerability,
)
from ripscanner.core.patterns import resolve_patterns

USER_AGENT = "RIP-Scanner/0.2.0"
REQUEST_TIMEOUT = 10


def compile_pattern(spec: PatternSpec) -> re.Pattern:
    """Literal, never a user regex: the value is escaped before compiling."""
    try:
        return re.compile(re.escape(spec.literal))
    except re.error as exc:
        raise RecoverablePatternError(f"{spec.key}: {exc}") from exc


def read_lines(path: Path) -> List[str]:
    """File content split on newlines; undecodable bytes are replaced."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise RecoverablePatternError(f"Cannot read {path}: {exc}") from exc
    lines = data.decode("utf-8", errors="replace").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def match_lines(path: Path, lines: Sequence[str], spec: PatternSpec,
                rx: re.Pattern) -> List[Match]:
    """One Match per line containing the literal, however often it occurs."""
    return [
        Match(file_path=path, line_number=n, line_content=line, key=spec.key)
        for n, line in enumerate(lines, start=1)
        if rx.search(line)
    ]


class ScanEngine:
    """
    Sequential secret scan of a source tree.

    Usage:
        engine = ScanEngine(config, logger=log)
        report = engine.scan()
    """

    def __init__(self, config: Config, logger=None, progress: bool = True,
                 log_writer: LogWriter | None = None):
        self.config = config
        self.logger = logger
        self.progress = progress
        self.log_writer = log_writer or LogWriter(config.log_dir)

    def target(self) -> ScanTarget:
        return ScanTarget(
            root=Path(self.config.repository_path),
            extensions=frozenset(self.config.file_extensions),
            ignore_patterns=frozenset(self.config.ignore_patterns),
        )

    def _skip(self, exc: Exception) -> None:
        if policy_for(exc) != SKIP:
            raise exc
        if self.logger:
            self.logger.debug(f"Skipped: {exc}")

    def scan(self) -> ScanReport:
        start = time.monotonic()

        patterns, fallback = resolve_patterns(self.config.env_pairs())
        if self.logger:
            if fallback:
                self.logger.warn(
                    f"No secret values configured, using built-in checklist "
                    f"({len(patterns)} patterns)")
            else:
                self.logger.info(
                    f"Scanning for {len(patterns)} environment variable values...")

        files = collect_files(self.target())
        if fallback:
            # The env file would trivially match its own values
            files = [f for f in files if f.name != self.config.env_filename]

        compiled = []
        for spec in patterns:
            try:
                compiled.append((spec, compile_pattern(spec)))
            except RecoverablePatternError as exc:
                self._skip(exc)

        matches: List[Match] = []
        files_scanned = 0
        for path in tqdm(files, desc="Scanning files", unit="file",
                         disable=not self.progress):
            try:
                lines = read_lines(path)
            except RecoverablePatternError as exc:
                self._skip(exc)
                lines = []
            for spec, rx in compiled:
                matches.extend(match_lines(path, lines, spec, rx))
            files_scanned += 1

        log_path = self.log_writer.write(matches)

        return ScanReport(
            matches=matches,
            files_scanned=files_scanned,
            duration=time.monotonic() - start,
            log_path=log_path,
            fallback_mode=fallback,
        )


class WebProbe:
    """
    Sequential web heuristics against a base URL.

    Every request is awaited before the next one starts. Network failures
    skip that single request and never become findings.
    """

    def __init__(self, logger=None, checkers: List[BaseChecker] | None = None,
                 timeout: float = REQUEST_TIMEOUT, proxy: str | None = None,
                 verify: bool = True, transport: httpx.AsyncBaseTransport | None = None):
        self.logger = logger
        self.checkers = checkers if checkers is not None else [
            SensitiveFiles(), Robots(), SecurityHeaders()]
        self.timeout = timeout
        self.proxy = proxy
        self.verify = verify
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        kwargs = dict(
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            verify=self.verify,
        )
        if self.transport is not None:
            kwargs["transport"] = self.transport
        elif self.proxy:
            kwargs["proxy"] = self.proxy
        return httpx.AsyncClient(**kwargs)

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        try:
            return await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RecoverableNetworkError(f"{url}: {exc}") from exc

    async def scan(self, base_url: str) -> WebReport:
        vulns: List[WebVulnerability] = []
        endpoints_checked = 0

        if self.logger:
            self.logger.info(f"Scanning web endpoints on {base_url}")

        async with self._client() as client:
            for chk in self.checkers:
                for path in chk.get_paths():
                    url = chk.join(base_url, path)
                    if chk.counts_endpoints:
                        endpoints_checked += 1
                    if self.logger:
                        self.logger.debug(f"→ GET {url}")
                    try:
                        resp = await self._fetch(client, url)
                    except RecoverableNetworkError as exc:
                        if policy_for(exc) != SKIP:
                            raise
                        if self.logger:
                            self.logger.debug(f"Request failed, skipping: {exc}")
                        continue
                    found = chk.check(url, path, resp)
                    for v in found:
                        if self.logger:
                            self.logger.finding(v)
                    vulns.extend(found)

        return WebReport(base_url=base_url, vulnerabilities=vulns,
                         endpoints_checked=endpoints_checked)
