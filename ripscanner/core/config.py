"""Scanner configuration: defaults, TOML loading, and .env parsing."""

import tempfile
import tomllib
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

from ripscanner.core.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(".ripconfig.toml")

DEFAULT_EXTENSIONS = [
    "js", "ts", "jsx", "tsx", "py", "rb", "php", "java", "go", "rs",
    "cpp", "c", "cs", "yaml", "yml", "json", "xml", "md", "txt",
]

DEFAULT_IGNORE_PATTERNS = [
    "node_modules", ".git", "target", "dist", "build", ".next",
    "coverage", ".nyc_output", "logs", "*.log", ".DS_Store", "Thumbs.db",
]

# Values that are never worth searching for
TRIVIAL_VALUES = {"", "0", "localhost", "127.0.0.1",
                  "true", "false", "null", "undefined"}


def parse_env_text(text: str) -> List[Tuple[str, str]]:
    """
    Parse KEY=VALUE lines into (key, value) pairs, in file order.

    Blank lines and ``#`` comments are skipped, surrounding quotes are
    stripped and trivial values dropped.
    """
    pairs = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if value in TRIVIAL_VALUES:
            continue
        pairs.append((key, value))
    return pairs


@dataclass
class Config:
    repository_path: Path = Path(".")
    env_filename: str = ".env"
    env_keys: List[str] = field(default_factory=list)
    file_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    ignore_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    enable_web_scan: bool = False
    web_url: Optional[str] = None
    log_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))

    # ── loading ────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Read a TOML config file. Unknown keys are ignored."""
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigurationError(f"Cannot read config {path}: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}

        for name in ("env_keys", "file_extensions", "ignore_patterns"):
            if name in kwargs and not (
                isinstance(kwargs[name], list)
                and all(isinstance(x, str) for x in kwargs[name])
            ):
                raise ConfigurationError(f"'{name}' must be a list of strings")
        if "enable_web_scan" in kwargs and not isinstance(kwargs["enable_web_scan"], bool):
            raise ConfigurationError("'enable_web_scan' must be a boolean")
        for name in ("repository_path", "env_filename", "web_url", "log_dir"):
            if kwargs.get(name) is not None and not isinstance(kwargs[name], str):
                raise ConfigurationError(f"'{name}' must be a string")

        for name in ("repository_path", "log_dir"):
            if name in kwargs:
                kwargs[name] = Path(kwargs[name])
        return cls(**kwargs)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["repository_path"] = str(self.repository_path)
        d["log_dir"] = str(self.log_dir)
        return d

    def validate(self) -> None:
        """Raise ConfigurationError if the config can't drive a scan."""
        root = Path(self.repository_path)
        if not root.exists():
            raise ConfigurationError(f"Repository path does not exist: {root}")
        if not root.is_dir():
            raise ConfigurationError(f"Repository path is not a directory: {root}")
        if not self.file_extensions:
            raise ConfigurationError("No file extensions configured")
        dotted = [e for e in self.file_extensions if e.startswith(".")]
        if dotted:
            raise ConfigurationError(
                f"File extensions must not start with a dot: {', '.join(dotted)}")
        if self.enable_web_scan:
            if not self.web_url:
                raise ConfigurationError("Web scan enabled but no URL provided")
            parts = urlsplit(self.web_url)
            if parts.scheme not in ("http", "https") or not parts.netloc:
                raise ConfigurationError(f"Invalid web URL: {self.web_url!r}")

    # ── .env handling ──────────────────────────────────────────

    @property
    def env_path(self) -> Path:
        return Path(self.repository_path) / self.env_filename

    def _read_env(self) -> List[Tuple[str, str]]:
        if not self.env_path.is_file():
            return []
        text = self.env_path.read_text(encoding="utf-8", errors="ignore")
        return parse_env_text(text)

    def parse_env_keys(self) -> List[str]:
        """Keys in the env file whose values are worth scanning for."""
        return [k for k, _ in self._read_env()]

    def env_pairs(self) -> List[Tuple[str, str]]:
        """
        (key, value) pairs to search for.

        Each selected key is paired with its own value, in ``env_keys`` order.
        Selected keys that are missing from the env file, or whose value is
        trivial, are dropped, so the result can be shorter than ``env_keys``
        but never shifts a value onto another key. With no ``env_keys``
        selected, every non-trivial entry in the env file is used.
        """
        entries = self._read_env()
        if not self.env_keys:
            return entries
        values = dict(entries)
        return [(k, values[k]) for k in self.env_keys if k in values]
