"""Persisted audit log: one plain-text file per scan."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from ripscanner.core.errors import FatalIOError
from ripscanner.core.masker import mask_line
from ripscanner.core.models import Match

BANNER = "RIP Vulnerability Scan Results"
SEPARATOR = "---"
SENSITIVITY_WARNING = (
    "WARNING: This file describes where secrets were found in your code.\n"
    "Matched content below is masked, but file paths and key names are not.\n"
    "Treat this log as sensitive and delete it once the findings are fixed."
)

_MAX_ATTEMPTS = 1000


class LogWriter:
    """
    Writes ``rip-<YYYYMMDD_HHMMSS>-<microseconds>.log`` into ``log_dir``.

    Files are opened in exclusive mode; if the name is already taken a
    ``-N`` counter is appended, so a previous run's log is never touched.
    """

    def __init__(self, log_dir: str | Path, clock=None):
        self.log_dir = Path(log_dir)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _candidates(self, now: datetime):
        stem = f"rip-{now:%Y%m%d_%H%M%S}-{now:%f}"
        yield self.log_dir / f"{stem}.log"
        for n in range(1, _MAX_ATTEMPTS):
            yield self.log_dir / f"{stem}-{n}.log"

    def render(self, matches: Sequence[Match], now: datetime) -> str:
        lines = [
            BANNER,
            f"Generated: {now:%Y-%m-%d %H:%M:%S} UTC",
            f"Total matches: {len(matches)}",
            "",
            SENSITIVITY_WARNING,
            "",
        ]
        for m in matches:
            lines += [
                f"File: {m.file_path}",
                f"Line: {m.line_number}",
                f"Key: {m.key}",
                f"Content: {mask_line(m.line_content.strip())}",
                SEPARATOR,
            ]
        return "\n".join(lines) + "\n"

    def write(self, matches: Sequence[Match]) -> Path:
        now = self._clock()
        content = self.render(matches, now)
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            for path in self._candidates(now):
                try:
                    with open(path, "x", encoding="utf-8") as f:
                        f.write(content)
                    return path
                except FileExistsError:
                    continue
        except OSError as exc:
            raise FatalIOError(f"Cannot write log file in {self.log_dir}: {exc}") from exc
        raise FatalIOError(f"No free log file name in {self.log_dir}")
