from __future__ import annotations

import pytest

from birch.schemas import ErrorKind, RunReport


def test_success_report_requires_result():
    with pytest.raises(ValueError, match="requires a result"):
        RunReport(ok=True)


def test_failure_report_requires_error_kind():
    with pytest.raises(ValueError, match="requires an error_kind"):
        RunReport(ok=False, error="boom")


def test_report_json_round_trip():
    report = RunReport(ok=False, error="step 2: div by zero", error_kind=ErrorKind.EXECUTION, steps=2)
    data = report.model_dump(mode="json")
    assert data["error_kind"] == "execution"
    assert RunReport.model_validate_json(report.model_dump_json()) == report


def test_negative_steps_rejected():
    with pytest.raises(ValueError):
        RunReport(ok=True, result=1, steps=-1)
