"""Tests for the machine: stepping, the run loop and the configuration trace."""

import io
from pathlib import Path

import pytest

from turing_tape import (
    Action,
    Configuration,
    Direction,
    Machine,
    Program,
    StepLimitExceeded,
    StepResult,
    UnmappedTransition,
)

EXAMPLES = Path(__file__).resolve().parents[2] / "examples"


def _run_lines(machine, word, **kwargs):
    out = io.StringIO()
    machine.run(word, out=out, **kwargs)
    return out.getvalue().splitlines()


def test_single_step_scenario(capsys):
    """One transition: 'a' becomes 'b', the head walks onto a fresh blank and halts."""
    machine = Machine(0, 1, {(0, "a"): Action(1, "b", Direction.R)})

    final = machine.run("a")

    assert capsys.readouterr().out.splitlines() == [
        "...B[0]aB...",
        "...Bb[1]BB...",
    ]
    assert final.state == 1
    assert final.cells == ("b", "B")
    assert final.head == 1
    assert machine.step_count == 1


def test_empty_word_scenario(capsys):
    """Empty word with a no-move transition: a single blank, head never moves."""
    machine = Machine(0, 1, {(0, "B"): Action(1, "B", Direction.N)})

    machine.run("")

    assert capsys.readouterr().out.splitlines() == [
        "...B[0]BB...",
        "...B[1]BB...",
    ]
    assert str(machine.tape) == "B"


def test_unmapped_transition_stops_after_exposing_configuration():
    machine = Machine(0, 1, {(0, "a"): Action(0, "a", Direction.R)})
    out = io.StringIO()

    with pytest.raises(UnmappedTransition) as excinfo:
        machine.run("a", out=out)

    assert out.getvalue().splitlines() == [
        "...B[0]aB...",
        "...Ba[0]BB...",
    ]
    assert excinfo.value.state == 0
    assert excinfo.value.symbol == "B"
    assert "not programmed for" in str(excinfo.value)


def test_start_state_equal_to_halting_state_prints_once():
    lines = _run_lines(Machine(4, 4, {}), "ab")
    assert lines == ["...B[4]abB..."]


def test_unary_addition_trace():
    machine = Program.from_file(EXAMPLES / "unary_add.tm").machine()
    lines = _run_lines(machine, "101")
    assert lines == [
        "...B[0]101B...",
        "...B1[0]01B...",
        "...B11[1]1B...",
        "...B111[1]BB...",
        "...B11[2]1B...",
        "...B11[3]BB...",
    ]
    assert machine.count_nonblanks() == 2


def test_binary_increment_grows_to_the_left():
    machine = Program.from_file(EXAMPLES / "binary_increment.tm").machine()
    lines = _run_lines(machine, "11")

    assert lines[-3:] == [
        "...B[1]10B...",
        "...B[1]B00B...",
        "...B[2]100B...",
    ]
    assert str(machine.tape) == "100"
    assert machine.tape.first_position == -1
    assert machine.step_count == len(lines) - 1


def test_padding_blanks_are_always_printed():
    """The outer B markers appear even when the boundary cells are blank already."""
    config = Configuration(state=7, cells=("B", "x", "B"), head=2)
    assert str(config) == "...BBx[7]BB..."


def test_step_results():
    machine = Machine(
        0,
        2,
        {
            (0, "a"): Action(1, "a", Direction.R),
            (1, "b"): Action(2, "c", Direction.N),
        },
    )
    machine.start("ab")

    assert machine.step() is StepResult.CONTINUE
    assert machine.state == 1
    assert machine.step() is StepResult.HALTED
    assert machine.is_halted()
    assert str(machine.tape) == "ac"

    # Stepping a halted machine changes nothing
    assert machine.step() is StepResult.HALTED
    assert machine.step_count == 2


def test_unmapped_step_leaves_machine_untouched():
    machine = Machine(0, 1, {})
    machine.start("a")
    before = machine.configuration()

    assert machine.step() is StepResult.UNMAPPED
    assert machine.configuration() == before
    assert machine.step_count == 0


def test_bad_symbol_in_delta_leaves_machine_untouched():
    """A hand-built table that writes more than one character fails before any change."""
    machine = Machine(0, 1, {(0, "a"): Action(1, "ab", Direction.R)})
    machine.start("a")
    before = machine.configuration()

    with pytest.raises(ValueError):
        machine.step()

    assert machine.state == 0
    assert machine.step_count == 0
    assert machine.configuration() == before


def test_step_before_start_raises():
    machine = Machine(0, 1, {})
    with pytest.raises(RuntimeError, match="start"):
        machine.step()


def test_machine_runs_only_once():
    machine = Machine(0, 1, {(0, "a"): Action(1, "a", Direction.N)})
    _run_lines(machine, "a")
    with pytest.raises(RuntimeError, match="new Machine"):
        machine.run("a")


def test_max_steps_bounds_a_non_halting_program():
    """A program that walks right forever is stopped by the caller's step limit."""
    machine = Machine(0, 1, {(0, "B"): Action(0, "B", Direction.R)})
    out = io.StringIO()

    with pytest.raises(StepLimitExceeded) as excinfo:
        machine.run("", out=out, max_steps=5)

    assert excinfo.value.steps == 5
    assert machine.step_count == 5
    lines = out.getvalue().splitlines()
    assert len(lines) == 6
    # Blanks left behind are reclaimed, so the tape never grows
    assert set(lines) == {"...B[0]BB..."}
    assert len(machine.tape) == 1


def test_iterating_a_machine():
    """Like an iterator, each next() is one step; iteration ends at the halting state."""
    machine = Program.from_file(EXAMPLES / "unary_add.tm").machine()
    machine.start("1101")

    configurations = list(machine)

    assert machine.is_halted()
    assert len(configurations) == machine.step_count
    assert configurations[-1].state == 3
    assert [config.step for config in configurations] == list(
        range(1, machine.step_count + 1)
    )


def test_iterating_into_an_unmapped_pair_raises():
    machine = Machine(0, 1, {(0, "a"): Action(0, "b", Direction.R)})
    machine.start("aa")

    assert next(machine).cells == ("b", "a")
    assert next(machine).cells == ("b", "b", "B")
    with pytest.raises(UnmappedTransition):
        next(machine)


def test_trace_can_be_turned_off_and_observed():
    machine = Program.from_file(EXAMPLES / "unary_add.tm").machine()
    out = io.StringIO()
    seen = []

    final = machine.run("1101", out=out, trace=False, on_configuration=seen.append)

    assert out.getvalue() == ""
    assert seen[0].step == 0
    assert seen[-1] == final
    assert len(seen) == machine.step_count + 1


def test_configuration_positions():
    machine = Machine(0, 1, {(0, "a"): Action(1, "a", Direction.L)})
    _run_lines(machine, "a")
    final = machine.configuration()

    assert final.first_position == -1
    assert final.head == 0
    assert final.head_position == -1
