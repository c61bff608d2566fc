"""Post-run reduction of per-worker run summaries.

Parallel workers each own a private ``GenerationContext``. Once every worker
has finished its share of events, their ``run_summary`` dicts are combined
here. Nothing in this module touches live state.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Any, Dict, Iterable, List

from .report import SUMMARY_KIND


def _combine_sigma(parts: List[Dict[str, Any]]) -> Dict[str, Any]:
    n_acc = sum(int(p["n_accepted"]) for p in parts)
    if n_acc > 0:
        sigma_gen = sum(p["sigma_gen"] * p["n_accepted"] for p in parts) / n_acc
        sigma_err = math.sqrt(sum((p["sigma_err"] * p["n_accepted"]) ** 2 for p in parts)) / n_acc
    else:
        sigma_gen = 0.0
        sigma_err = 0.0
    return {
        "n_tried": sum(int(p["n_tried"]) for p in parts),
        "n_selected": sum(int(p["n_selected"]) for p in parts),
        "n_accepted": n_acc,
        "sigma_gen": sigma_gen,
        "sigma_err": sigma_err,
        "weight_sum": sum(float(p["weight_sum"]) for p in parts),
    }


def combine(summaries: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Reduce several worker summaries into one.

    Counts and weight sums add. The cross section of each process code is the
    mean of the worker estimates weighted by their accepted events; errors
    combine in quadrature with the same weights. Diagnostic and loop counts
    add key by key.
    """
    summaries = list(summaries)
    if not summaries:
        raise ValueError("combine() needs at least one summary")
    for s in summaries:
        if s.get("kind") != SUMMARY_KIND:
            raise ValueError(f"Unsupported summary kind: {s.get('kind')!r}")

    beams = summaries[0]["beams"]
    if any(s["beams"] != beams for s in summaries[1:]):
        raise ValueError("Cannot combine runs with different beams")

    by_code: Dict[str, List[Dict[str, Any]]] = {}
    for s in summaries:
        for code, snap in s["sigma"].items():
            by_code.setdefault(code, []).append(snap)

    counters: Counter = Counter()
    diagnostics: Counter = Counter()
    for s in summaries:
        counters.update(s["counters"])
        for d in s["diagnostics"]:
            diagnostics[(d["message"], d["extra"])] += int(d["count"])

    return {
        "kind": SUMMARY_KIND,
        "beams": dict(beams),
        "sigma": {code: _combine_sigma(parts) for code, parts in sorted(by_code.items())},
        "counters": dict(sorted(counters.items())),
        "diagnostics": [
            {"message": message, "extra": extra, "count": count}
            for (message, extra), count in sorted(diagnostics.items())
        ],
        "error_total": sum(diagnostics.values()),
        "n_workers": len(summaries),
    }
