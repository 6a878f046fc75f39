"""Machine-readable output for --json."""

import json

from ripscanner.core.models import ScanReport, WebReport


def build_document(scan: ScanReport | None, web: WebReport | None = None) -> dict:
    return {
        "scan": scan.to_dict() if scan else None,
        "web": web.to_dict() if web else None,
    }


def render_json(scan: ScanReport | None, web: WebReport | None = None) -> str:
    return json.dumps(build_document(scan, web), indent=2)
