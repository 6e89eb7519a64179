from __future__ import annotations

import pytest

from birch.api import run_source
from birch.errors import BirchError, ExecutionError, ParseError


def test_div_by_zero():
    # The divisor is the second value popped, i.e. the one written first.
    with pytest.raises(ExecutionError, match="div by zero"):
        run_source(src="0 5 div")
    assert run_source(src="5 0 div") == 0


def test_rem_by_zero():
    with pytest.raises(ExecutionError, match="rem by zero"):
        run_source(src="0 5 rem")


def test_ifz_needs_three_values():
    with pytest.raises(ExecutionError):
        run_source(src="3 0 ifz")


@pytest.mark.parametrize(
    "src",
    [
        # one value required
        "pop",
        "dup",
        "exec",
        # two values required
        "1 add",
        "1 sub",
        "1 mul",
        "1 div",
        "1 rem",
        "1 eq",
        "1 lt",
        "1 gt",
        "1 swap",
        # three values required
        "1 2 ifz",
    ],
)
def test_stack_underflow(src: str):
    with pytest.raises(ExecutionError):
        run_source(src=src)


@pytest.mark.parametrize(
    "src",
    [
        "[ ] 1 add",
        "1 [ ] add",
        "[ ] 1 lt",
        "[ ] dup",
        "1 exec",
    ],
)
def test_type_mismatch(src: str):
    with pytest.raises(ExecutionError):
        run_source(src=src)


@pytest.mark.parametrize("src", ["1 2 2 dup", "dup", "1 -2 dup", "1 0 dup pop pop 0 dup"])
def test_dup_out_of_range(src: str):
    with pytest.raises(ExecutionError):
        run_source(src=src)


def test_quotation_as_final_value():
    with pytest.raises(ExecutionError, match="quotation"):
        run_source(src="[ 1 ]")


def test_overflow_fails():
    with pytest.raises(ExecutionError, match="overflow"):
        run_source(src="1 9223372036854775807 add")
    with pytest.raises(ExecutionError, match="overflow"):
        run_source(src="-1 -9223372036854775808 div")
    assert run_source(src="-1 -9223372036854775807 add") == -(2**63)


def test_error_records_step():
    with pytest.raises(ExecutionError) as exc:
        run_source(src="1 2 add 0 swap div")
    assert exc.value.step == 5
    assert str(exc.value).startswith("step 5: ")


def test_step_limit():
    forever = "[ 0 dup exec ] 0 dup exec"
    with pytest.raises(ExecutionError, match="step limit"):
        run_source(src=forever, max_steps=100)


def test_step_limit_does_not_affect_terminating_programs():
    assert run_source(src="1 2 add", max_steps=3) == 3
    with pytest.raises(ExecutionError):
        run_source(src="1 2 add", max_steps=2)


def test_error_hierarchy():
    assert issubclass(ParseError, BirchError)
    assert issubclass(ExecutionError, BirchError)
