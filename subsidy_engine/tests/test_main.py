"""End-to-end tests for the CLI orchestrator in main.py."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pytest

from subsidy_engine.main import _build_parser, run


def _args(request: Path, output: Path, **overrides) -> argparse.Namespace:
    values = {
        "request": str(request),
        "output": str(output),
        "tenure": None,
        "batch": None,
        "verbose": False,
        "dry_run": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def request_path(tmp_path: Path, sample_request: dict) -> Path:
    path = tmp_path / "sharma.json"
    path.write_text(json.dumps(sample_request), encoding="utf-8")
    return path


class TestRun:
    def test_writes_outputs(self, tmp_path: Path, request_path: Path, capsys) -> None:
        out = tmp_path / "out"
        assert run(_args(request_path, out)) == 0
        run_dir = out / "sharma_residence"
        assert (run_dir / "sharma_residence_summary.csv").exists()
        assert (run_dir / "sharma_residence_emi_options.csv").exists()
        assert (run_dir / "sharma_residence_proposal.csv").exists()
        assert (run_dir / "sharma_residence_emi_schedule.csv").exists()
        assert not (run_dir / "sharma_residence_batch.csv").exists()

        stdout = capsys.readouterr().out
        assert "Quote: sharma_residence" in stdout
        assert "₹3,75,000" in stdout
        assert "₹2,37,000" in stdout

    def test_proposal_carries_request_details(
        self, tmp_path: Path, sample_request: dict, capsys
    ) -> None:
        sample_request["quote"]["partner"] = {"name": "PartnerX", "phone": "9000000001"}
        sample_request["quote"]["installation_address"] = "12 MG Road"
        path = tmp_path / "sharma.json"
        path.write_text(json.dumps(sample_request), encoding="utf-8")
        out = tmp_path / "out"
        assert run(_args(path, out, tenure=84)) == 0

        text = (out / "sharma_residence" / "sharma_residence_proposal.csv").read_text(
            encoding="utf-8"
        )
        assert "R. Sharma" in text
        assert "PartnerX" in text
        assert "+91-9000000001" in text
        assert "12 MG Road" in text
        assert "Monthly EMI (84 months)" in text
        assert "Rs 2,37,000" in text

        stdout = capsys.readouterr().out
        assert "After power savings:" in stdout
        assert "Lifetime savings:" in stdout

    def test_schedule_follows_tenure_override(self, tmp_path: Path, request_path: Path) -> None:
        out = tmp_path / "out"
        assert run(_args(request_path, out, tenure=84)) == 0
        schedule = out / "sharma_residence" / "sharma_residence_emi_schedule.csv"
        # header + 84 months
        assert len(schedule.read_text(encoding="utf-8").splitlines()) == 85

    def test_no_schedule_unless_requested(self, tmp_path: Path, minimal_request: dict) -> None:
        path = tmp_path / "minimal.json"
        path.write_text(json.dumps(minimal_request), encoding="utf-8")
        out = tmp_path / "out"
        assert run(_args(path, out)) == 0
        assert not (out / "minimal" / "minimal_emi_schedule.csv").exists()

    def test_batch(self, tmp_path: Path, request_path: Path) -> None:
        batch = tmp_path / "leads.csv"
        batch.write_text("capacity_kw,panel_type,state\n3,dcr,\n5,non_dcr,Odisha\n", encoding="utf-8")
        out = tmp_path / "out"
        assert run(_args(request_path, out, batch=str(batch))) == 0
        lines = (out / "sharma_residence" / "sharma_residence_batch.csv").read_text(
            encoding="utf-8"
        ).splitlines()
        assert len(lines) == 3

    def test_bad_batch_returns_1(self, tmp_path: Path, request_path: Path) -> None:
        batch = tmp_path / "leads.csv"
        batch.write_text("capacity_kw\n3\n", encoding="utf-8")
        assert run(_args(request_path, tmp_path / "out", batch=str(batch))) == 1

    def test_dry_run(self, tmp_path: Path, request_path: Path, capsys) -> None:
        out = tmp_path / "out"
        assert run(_args(request_path, out, dry_run=True)) == 0
        assert "validated successfully" in capsys.readouterr().out
        assert not out.exists()

    def test_missing_request_returns_1(self, tmp_path: Path) -> None:
        assert run(_args(tmp_path / "missing.json", tmp_path / "out")) == 1

    def test_invalid_request_returns_1(self, tmp_path: Path, sample_request: dict) -> None:
        sample_request["pricing"]["panel_type"] = "mono"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(sample_request), encoding="utf-8")
        assert run(_args(path, tmp_path / "out")) == 1


class TestParser:
    def test_defaults(self) -> None:
        args = _build_parser().parse_args(["--request", "r.json"])
        assert args.output is None
        assert args.tenure is None
        assert args.batch is None
        assert not args.dry_run
        assert not args.verbose

    def test_tenure_choices(self) -> None:
        args = _build_parser().parse_args(["--request", "r.json", "--tenure", "72"])
        assert args.tenure == 72
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["--request", "r.json", "--tenure", "24"])
