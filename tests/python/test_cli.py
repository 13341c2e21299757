"""Tests for the turing-tape command line."""

import json
from pathlib import Path

import pytest

from turing_tape.cli import build_parser, main

EXAMPLES = Path(__file__).resolve().parents[2] / "examples"
UNARY_ADD = str(EXAMPLES / "unary_add.tm")


def test_runs_program_and_prints_trace(capsys):
    assert main([UNARY_ADD, "101"]) == 0

    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0] == "...B[0]101B..."
    assert lines[-1] == "...B11[3]BB..."
    assert len(lines) == 6
    assert "Error" not in captured.err


def test_empty_word(tmp_path, capsys):
    program = tmp_path / "blank.tm"
    program.write_text("1\n\nB\n0\n1\n0 B 1 B N\n", encoding="utf-8")

    assert main([str(program), ""]) == 0
    assert capsys.readouterr().out.splitlines() == ["...B[0]BB...", "...B[1]BB..."]


def test_unmapped_transition_exits_non_zero(capsys):
    """The trace stops at the configuration that exposed the gap."""
    assert main([UNARY_ADD, "11"]) == 1

    captured = capsys.readouterr()
    assert captured.out.splitlines()[-1] == "...B11[0]BB..."
    assert "Error:" in captured.err
    assert "not programmed for" in captured.err


def test_malformed_program_exits_before_running(tmp_path, capsys):
    program = tmp_path / "bad.tm"
    program.write_text("3\n10\n10B\n0\n3\n0 1 0 1 UP\n", encoding="utf-8")

    assert main([str(program), "1"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "line 6" in captured.err


def test_missing_program_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.tm"), "1"]) == 1
    assert "Could not read" in capsys.readouterr().err


def test_quiet_suppresses_the_trace(capsys):
    assert main([UNARY_ADD, "101", "--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_step_limit(tmp_path, capsys):
    program = tmp_path / "forever.tm"
    program.write_text("1\n\nB\n0\n1\n0 B 0 B R\n", encoding="utf-8")

    assert main([str(program), "", "--max-steps", "3"]) == 1

    captured = capsys.readouterr()
    assert len(captured.out.splitlines()) == 4
    assert "did not halt within 3 steps" in captured.err


def test_config_file(tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"trace": False}), encoding="utf-8")

    assert main([UNARY_ADD, "101", "--config", str(config)]) == 0
    assert capsys.readouterr().out == ""


def test_invalid_config_file(tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"max_steps": "many"}), encoding="utf-8")

    assert main([UNARY_ADD, "101", "--config", str(config)]) == 1
    assert "max_steps" in capsys.readouterr().err


def test_invalid_max_steps_flag(capsys):
    assert main([UNARY_ADD, "101", "--max-steps", "0"]) == 1
    assert "max_steps must be at least 1" in capsys.readouterr().err


def test_diagram_is_written(tmp_path, capsys):
    Image = pytest.importorskip("PIL.Image")
    diagram = tmp_path / "run.png"

    assert main([UNARY_ADD, "101", "-q", "--diagram", str(diagram)]) == 0

    with Image.open(diagram) as image:
        # 4 tape positions and 6 configurations, 8 pixels per cell
        assert image.size == (32, 48)


def test_usage_errors_exit_with_status_2(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([UNARY_ADD])
    assert excinfo.value.code == 2


def test_parser_defaults():
    args = build_parser().parse_args(["prog.tm", "abc"])
    assert args.file == "prog.tm"
    assert args.word == "abc"
    assert args.max_steps is None
    assert not args.quiet
    assert args.verbose == 0
