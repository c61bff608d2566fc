from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict

from .info import Info

SUMMARY_KIND = "hepinfo.run_summary.v1"


def stable_json_dumps(obj: Any) -> str:
    """Deterministic JSON for hashing / embedding."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def run_summary(info: Info) -> Dict[str, Any]:
    """Run-level view of a context: beams, cross sections, counters, errors.

    Cross sections are keyed by process code as a string ("0" = total).
    Diagnostics are ``{"message", "extra", "count"}`` items in key order.
    """
    return {
        "kind": SUMMARY_KIND,
        "beams": {
            "id_a": info.id_a(),
            "id_b": info.id_b(),
            "e_cm": info.e_cm(),
        },
        "sigma": {str(code): asdict(info.sigma(code)) for code in info.sigma_codes()},
        "counters": info.counters(),
        "diagnostics": [
            {"message": message, "extra": extra, "count": count}
            for (message, extra), count in info.error_messages()
        ],
        "error_total": info.error_total_number(),
    }
