import json
from pathlib import Path

from schedsim.cli import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args(["run", "-a", "rr", "--example"])
    assert args.quantum == 2
    assert args.example
    assert args.workload is None


def test_run_example_prints_tables(capsys):
    assert main(["run", "-a", "sjf", "--example"]) == 0
    out = capsys.readouterr().out
    assert "SJF (non-preemptive)" in out
    assert "Per-process metrics" in out
    assert "CPU utilization" in out


def test_run_plain_gantt(capsys):
    assert main(["run", "-a", "fcfs", "--example", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart:" in out
    assert "|====" in out


def test_run_json(capsys, tmp_path: Path):
    wl = tmp_path / "w.json"
    wl.write_text(json.dumps([{"pid": "P1", "arrival_time": 2, "burst_time": 3, "priority": 0}]))
    assert main(["run", "-a", "FCFS", "-w", str(wl), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["cpu_utilization"] == 60.0
    assert data["timeline"][0]["pid"] is None


def test_compare(capsys):
    assert main(["compare", "--example", "-a", "fcfs", "rr", "-q", "3"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "FCFS" in out


def test_unknown_policy_exit_code(capsys):
    assert main(["run", "-a", "lottery", "--example"]) == 2
    assert "lottery" in capsys.readouterr().out


def test_missing_workload_exit_code(capsys, tmp_path: Path):
    assert main(["compare", "-w", str(tmp_path / "nope.csv")]) == 2
    assert "Workload not found" in capsys.readouterr().out
