from collections import defaultdict
from datetime import datetime

from colorama import init as colorama_init, Fore, Style

from ripscanner.core.masker import mask_for_display
from ripscanner.core.models import (
    ScanReport, WebReport, WebVulnerability, Severity, SEVERITY_ORDER,
)
colorama_init(autoreset=True)

SEVERITY_COLORS = {
    Severity.CRITICAL: Fore.LIGHTRED_EX,
    Severity.HIGH: Fore.RED,
    Severity.MEDIUM: Fore.YELLOW,
    Severity.LOW: Fore.GREEN,
}


class Log:
    def __init__(self, verbose: int = 1):
        self.verbose = verbose

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {color}[{level}]{Style.RESET_ALL}"

    def info(self, msg: str):
        if self.verbose >= 1:
            print(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            print(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        print(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        print(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            print(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    def finding(self, vuln: WebVulnerability):
        if self.verbose >= 2:
            col = SEVERITY_COLORS.get(vuln.severity, Fore.WHITE)
            print(f"{self._fmt(vuln.severity.value.upper(), col)} "
                  f"{vuln.vulnerability_type} {Style.DIM}{vuln.url}{Style.RESET_ALL}")


# ── file scan results ──────────────────────────────────────────

def group_by_file(report: ScanReport) -> dict:
    """Matches grouped per file, files in first-seen order."""
    groups = {}
    for m in report.matches:
        groups.setdefault(m.file_path, []).append(m)
    return groups


def display_results(report: ScanReport):
    print(f"\n{Style.BRIGHT}Scan Results{Style.RESET_ALL}")
    print(f"Files scanned: {report.files_scanned}")
    print(f"Scan duration: {report.duration:.2f}s")
    print(f"Log file: {report.log_path}")
    if report.fallback_mode:
        print(f"{Style.DIM}(built-in token checklist used){Style.RESET_ALL}")

    if not report.matches:
        print(f"{Fore.GREEN}{Style.BRIGHT}No vulnerabilities found!")
        return

    print(f"{Fore.RED}{Style.BRIGHT}Found {len(report.matches)} potential vulnerabilities:")

    for file_path, matches in group_by_file(report).items():
        print(f"\nFile: {Fore.LIGHTBLUE_EX}{file_path}{Style.RESET_ALL}")
        for m in matches:
            print(f"  {Style.DIM}Line:{Style.RESET_ALL}{Fore.YELLOW}{m.line_number}"
                  f"{Style.RESET_ALL} {Style.DIM}Key:{Style.RESET_ALL} "
                  f"{Fore.RED}{Style.BRIGHT}{m.key}{Style.RESET_ALL}")
            print(f"    {mask_for_display(m.line_content)}")

    print(f"\n{Fore.LIGHTYELLOW_EX}Recommendation: Review these files to ensure "
          f"secrets are not exposed.")


# ── web probe results ──────────────────────────────────────────

def group_by_severity(report: WebReport) -> dict:
    groups = defaultdict(list)
    for v in report.vulnerabilities:
        groups[v.severity].append(v)
    return groups


def display_web_results(report: WebReport):
    print(f"\n{Fore.LIGHTBLUE_EX}{Style.BRIGHT}Web Scan Results")
    print(f"Base URL: {report.base_url}")
    print(f"Endpoints checked: {report.endpoints_checked}")

    if not report.vulnerabilities:
        print(f"{Fore.GREEN}{Style.BRIGHT}No web vulnerabilities found!")
        return

    print(f"{Fore.RED}{Style.BRIGHT}Found {len(report.vulnerabilities)} web vulnerabilities:")

    groups = group_by_severity(report)
    for severity in SEVERITY_ORDER:
        vulns = groups.get(severity)
        if not vulns:
            continue
        col = SEVERITY_COLORS[severity]
        print(f"\n{col}o {Style.BRIGHT}{severity.value}:")
        for v in vulns:
            print(f"  {Style.DIM}Type:{Style.RESET_ALL} {v.vulnerability_type}")
            print(f"  {Style.DIM}URL:{Style.RESET_ALL} {Fore.LIGHTBLUE_EX}{v.url}")
            print(f"  {Style.DIM}Issue:{Style.RESET_ALL} {v.description}")
            print(f"  {Style.DIM}Fix:{Style.RESET_ALL} {Fore.GREEN}{v.recommendation}")
            print()

    print(f"{Fore.LIGHTYELLOW_EX}Web Security Recommendation: Address critical "
          f"and high severity issues first.")
