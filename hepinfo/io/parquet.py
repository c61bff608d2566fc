from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple


def _require_pyarrow():
    try:
        import pyarrow as pa  # type: ignore
        import pyarrow.parquet as pq  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("Parquet support requires 'pyarrow'. Install hepinfo[parquet].") from e
    return pa, pq


_META_PREFIX = "hepinfo."


def write_event_table(
    path: str,
    rows: Iterable[Dict[str, Any]],
    metadata: Optional[Dict[str, Any]] = None,
) -> int:
    """Write one row per event (``Info.to_dict()`` snapshots) to Parquet.

    ``metadata`` values are stored as strings in the schema key-value store
    under the ``hepinfo.`` prefix. Returns the number of rows written.
    """
    pa, pq = _require_pyarrow()
    rows = list(rows)
    table = pa.Table.from_pylist(rows)
    md = {f"{_META_PREFIX}{k}": str(v) for k, v in (metadata or {}).items()}
    if md:
        table = table.replace_schema_metadata(md)
    pq.write_table(table, path)
    return len(rows)


def read_event_table(path: str) -> Tuple[List[Dict[str, Any]], Dict[str, str]]:
    """Read rows and ``hepinfo.`` metadata back from a Parquet event table."""
    _, pq = _require_pyarrow()
    table = pq.read_table(path)
    raw = table.schema.metadata or {}
    md = {}
    for k, v in raw.items():
        key = k.decode("utf-8")
        if key.startswith(_META_PREFIX):
            md[key[len(_META_PREFIX):]] = v.decode("utf-8")
    return table.to_pylist(), md
