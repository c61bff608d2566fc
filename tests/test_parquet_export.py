import importlib

import pytest

from hepinfo.cli import main
from hepinfo.io import read_event_table, write_event_table

from conftest import produce_event

try:
    importlib.import_module("pyarrow")
    HAS_PYARROW = True
except Exception:
    HAS_PYARROW = False

pytestmark = pytest.mark.skipif(not HAS_PYARROW, reason="pyarrow not installed; parquet export tests skipped")


def test_event_table_round_trip(tmp_path, ctx):
    rows = []
    for n_mpi in (1, 3):
        produce_event(ctx, n_mpi=n_mpi)
        rows.append(ctx.info.to_dict())

    path = tmp_path / "events.parquet"
    assert write_event_table(str(path), rows, metadata={"generator": "toy"}) == 2

    back, md = read_event_table(str(path))
    assert md == {"generator": "toy"}
    assert len(back) == 2
    assert back[0]["name"] == "g g -> g g"
    assert back[1]["mpi_codes"] == [111, 111, 111]
    assert back[0]["weight"] == 1.0


def test_cli_run_writes_parquet(tmp_path, capsys):
    path = tmp_path / "run.parquet"
    assert main(["run", "--events", "25", "--json", "--parquet", str(path)]) == 0
    rows, md = read_event_table(str(path))
    assert 0 < len(rows) <= 25
    assert {r["worker"] for r in rows} == {0}
    assert "summaries" in md
