from __future__ import annotations

from typing import Any, Dict, List


def doctor_report() -> Dict[str, Any]:
    checks: List[Dict[str, Any]] = []

    # Core import
    try:
        import hepinfo  # noqa: F401
        checks.append({"name": "hepinfo import", "ok": True, "detail": "import ok"})
    except Exception as e:
        checks.append({"name": "hepinfo import", "ok": False, "detail": str(e)})

    try:
        from .pdg import name

        detail = f"2212 -> {name(2212)}"
        checks.append({"name": "particle (pdg)", "ok": True, "detail": detail})
    except Exception as e:
        checks.append({"name": "particle (pdg)", "ok": False, "detail": str(e)})

    # Optional deps
    try:
        import pyarrow  # noqa: F401
        checks.append({"name": "pyarrow (parquet)", "ok": True, "detail": "installed"})
    except Exception:
        checks.append({"name": "pyarrow (parquet)", "ok": True, "detail": "not installed (optional)"})

    ok_all = all(c["ok"] for c in checks)
    summary = "hepinfo doctor: OK" if ok_all else "hepinfo doctor: FAIL"

    return {"summary": summary, "checks": checks}
