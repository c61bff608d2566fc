import json
import subprocess
import sys

from hepinfo.cli import main


def _run_cli(*args):
    cmd = [sys.executable, "-m", "hepinfo.cli", *args]
    return subprocess.run(cmd, capture_output=True, text=True)


def test_cli_run_json():
    res = _run_cli("run", "--events", "50", "--seed", "5", "--json")
    assert res.returncode == 0, res.stderr
    summary = json.loads(res.stdout)
    assert summary["kind"] == "hepinfo.run_summary.v1"
    assert summary["beams"]["e_cm"] == 13000.0
    assert summary["counters"]["NEXT_CALLED"] == 50
    assert summary["sigma"]["0"]["n_accepted"] == summary["counters"]["EVENT_ACCEPTED"]


def test_cli_run_workers_are_combined():
    res = _run_cli("run", "--events", "20", "--workers", "3", "--json")
    assert res.returncode == 0, res.stderr
    summary = json.loads(res.stdout)
    assert summary["n_workers"] == 3
    assert summary["counters"]["NEXT_CALLED"] == 60


def test_cli_run_human_output(capsys):
    assert main(["run", "--events", "30", "--list"]) == 0
    out = capsys.readouterr().out
    assert "Error and Warning Messages Statistics" in out
    assert "hepinfo Info Listing" in out
    assert "Errors and warnings:" in out


def test_cli_run_reports_abort(capsys):
    assert main(["run", "--events", "2000", "--times-allowed-errors", "1", "--json"]) == 0
    captured = capsys.readouterr()
    assert "aborted prematurely" in captured.err
    summary = json.loads(captured.out)
    aborts = [d for d in summary["diagnostics"] if d["message"] == "Abort from EventLoop::run:"]
    assert aborts == [{"message": "Abort from EventLoop::run:", "extra": "too many generation failures", "count": 1}]
    assert summary["counters"]["NEXT_CALLED"] < 2000


def test_cli_bad_arguments(capsys):
    assert main(["run", "--events", "-1"]) == 1
    assert main(["run", "--workers", "0"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_doctor_json():
    res = _run_cli("doctor", "--json")
    assert res.returncode == 0
    assert json.loads(res.stdout)["summary"] == "hepinfo doctor: OK"
