"""Recursive file collection with extension allow-list and ignore rules."""

import os
from pathlib import Path
from typing import Iterable, List

from ripscanner.core.errors import FatalIOError
from ripscanner.core.models import ScanTarget


def extension_of(path: Path) -> str:
    """Extension without the leading dot ("" when there is none)."""
    return path.suffix[1:] if path.suffix else ""


def should_ignore(path: Path, ignore_patterns: Iterable[str]) -> bool:
    """
    ``*.ext`` patterns match the path's extension; anything else is a plain
    substring test against the path string. Other glob shapes never match.
    """
    path_str = str(path)
    for pattern in ignore_patterns:
        if "*" in pattern:
            if pattern.startswith("*.") and extension_of(path) == pattern[2:]:
                return True
        elif pattern in path_str:
            return True
    return False


def collect_files(target: ScanTarget) -> List[Path]:
    """
    Depth-first walk of ``target.root``.

    Ignored directories are pruned before they are listed. Entries of each
    directory are visited in name order so runs are repeatable. Any error
    listing a directory aborts the whole collection with FatalIOError.
    """
    files: List[Path] = []
    _collect(Path(target.root), target, files)
    return files


def _collect(directory: Path, target: ScanTarget, out: List[Path]) -> None:
    if should_ignore(directory, target.ignore_patterns):
        return

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise FatalIOError(f"Cannot read directory {directory}: {exc}") from exc

    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir():
            _collect(path, target, out)
        elif entry.is_file():
            if should_ignore(path, target.ignore_patterns):
                continue
            if extension_of(path) in target.extensions:
                out.append(path)
