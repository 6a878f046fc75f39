import argparse
import asyncio
import json
import sys
from pathlib import Path

from ripscanner.core.config import Config, DEFAULT_CONFIG_PATH
from ripscanner.core.engine import ScanEngine, WebProbe
from ripscanner.core.errors import ConfigurationError, FatalIOError
from ripscanner.reporters.console import Log, display_results, display_web_results
from ripscanner.reporters.json_report import render_json

VERSION = "0.2.0"

BANNER = r"""
 ____  ___ ____
|  _ \|_ _|  _ \
| |_) || || |_) |
|  _ < | ||  __/
|_| \_\___|_|

Rest In Peace, Vulnerabilities
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rip",
        description="Rest In Peace, Vulnerabilities - secret and web exposure scanner")
    p.add_argument("--auto", action="store_true",
                   help="Run with defaults when no config file exists")
    p.add_argument("--config", type=Path, default=None,
                   help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--skip-config", action="store_true",
                   help="Ignore any config file and use defaults")
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    p.add_argument("-q", "--quiet", action="store_true",
                   help="Only print results")
    p.add_argument("--json", action="store_true",
                   help="Print results as JSON")
    p.add_argument("-p", "--path", type=Path,
                   help="Repository path to scan")

    sub = p.add_subparsers(dest="command")
    scan = sub.add_parser("scan", help="Scan for exposed secrets (default)")
    scan.add_argument("scan_path", nargs="?", type=Path, metavar="PATH")
    scan.add_argument("--web", action="store_true",
                      help="Also probe the configured web URL")
    scan.add_argument("--url", help="Public URL for web scanning")

    cfg = sub.add_parser("config", help="Show configuration")
    cfg.add_argument("--show", action="store_true",
                     help="Print the effective configuration")

    sub.add_parser("version", help="Display version information")
    return p


def load_config(args) -> Config:
    if args.skip_config:
        return Config()
    path = args.config or DEFAULT_CONFIG_PATH
    if Path(path).exists():
        return Config.load(path)
    if args.config:
        raise ConfigurationError(f"Config file not found: {path}")
    return Config()


def apply_overrides(config: Config, args) -> Config:
    if args.path:
        config.repository_path = args.path
    if args.command in (None, "scan"):
        if getattr(args, "scan_path", None):
            config.repository_path = args.scan_path
        if getattr(args, "web", False):
            config.enable_web_scan = True
        if getattr(args, "url", None):
            config.web_url = args.url
    return config


def run_scan(config: Config, log: Log, as_json: bool) -> None:
    config.validate()

    if not as_json:
        if log.verbose >= 1:
            print(BANNER)
        log.info("[RIP-SCAN] Starting vulnerability scan...")
        log.info(f"Scanning path: {config.repository_path}")

    engine = ScanEngine(config, logger=None if as_json else log,
                        progress=not as_json and log.verbose >= 1)
    report = engine.scan()
    if not as_json:
        display_results(report)

    web_report = None
    if config.enable_web_scan:
        if not as_json:
            log.info("[RIP-WEB] Starting web vulnerability scan...")
        probe = WebProbe(logger=None if as_json else log)
        web_report = asyncio.run(probe.scan(config.web_url))
        if not as_json:
            display_web_results(web_report)

    if as_json:
        print(render_json(report, web_report))
    else:
        log.ok("[RIP-SCAN] Scan complete!")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log = Log(verbose=0 if args.quiet else args.verbose)

    if args.command == "version":
        print(f"RIP (Rest In Peace, Vulnerabilities) v{VERSION}")
        return 0

    try:
        config = apply_overrides(load_config(args), args)
        if args.command == "config":
            data = config.to_dict()
            data["env_keys_found"] = config.parse_env_keys()
            print(json.dumps(data, indent=2))
            return 0
        run_scan(config, log, args.json)
    except ConfigurationError as exc:
        log.fail(f"Configuration error: {exc}")
        return 2
    except FatalIOError as exc:
        log.fail(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
