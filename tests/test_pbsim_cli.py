"""
pbsim command line tests: exit codes, printed output, switches.
"""

import argparse
from pathlib import Path

import pytest

import pbsim

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def _program(tmp_path, text: str) -> str:
    path = tmp_path / "prog.pb"
    path.write_text(text, encoding="utf-8")
    return str(path)


def _run(*argv) -> int:
    return pbsim.main([*map(str, argv), "--no-prompt"])


class TestExitCodes:

    def test_halt(self, tmp_path, capsys):
        code = _run(_program(tmp_path, "P\n"), "--acc", 42)
        out = capsys.readouterr()
        assert code == pbsim.EXIT_HALT
        assert out.out.splitlines() == ["+000000000042  +00000000000"]
        assert "HALT after 1 steps" in out.err

    def test_alarm(self, tmp_path, capsys):
        code = _run(_program(tmp_path, "÷ 0 0\nP\n"), "--acc", 1)
        assert code == pbsim.EXIT_ALARM
        assert "Division by zero" in capsys.readouterr().err

    def test_waiting_for_keyboard(self, tmp_path):
        assert _run(_program(tmp_path, "K\nP\n")) == pbsim.EXIT_KEYBOARD

    def test_step_limit(self, tmp_path):
        code = _run(_program(tmp_path, "P\nH\n"), "--max-steps", 5)
        assert code == pbsim.EXIT_TIMEOUT

    def test_missing_file(self, tmp_path, capsys):
        assert _run(tmp_path / "absent.pb") == pbsim.EXIT_ALARM
        assert "File not found" in capsys.readouterr().err

    def test_load_error(self, tmp_path, capsys):
        assert _run(_program(tmp_path, "P\nQ 1\n")) == pbsim.EXIT_ALARM
        assert "Line 2:" in capsys.readouterr().err

    def test_unsupported_placeholder(self, tmp_path, capsys):
        assert _run(_program(tmp_path, "W 0 V\n")) == pbsim.EXIT_ALARM
        assert "Decode error at 1:00" in capsys.readouterr().err

    def test_acc_out_of_range(self, tmp_path, capsys):
        assert _run(_program(tmp_path, "P\n"), "--acc", 10 ** 12) == pbsim.EXIT_ALARM

    def test_start_slot_empty(self, tmp_path, capsys):
        code = _run(_program(tmp_path, "P\n"), "--start", 2)
        assert code == pbsim.EXIT_ALARM
        assert "No pinboard loaded in slot 2" in capsys.readouterr().err


class TestExamples:

    def test_sum(self, capsys):
        code = _run(EXAMPLES / "sum.pb", "--input", 12, "--input", 30)
        assert code == pbsim.EXIT_HALT
        assert capsys.readouterr().out.startswith("+000000000042")

    def test_countdown_values(self, capsys):
        code = _run(EXAMPLES / "countdown.pb", "-k", 1, "-k", 3)
        assert code == pbsim.EXIT_HALT
        printed = [int(line.split()[0]) for line in capsys.readouterr().out.splitlines()]
        assert printed == [3, 2, 1, 0, -1]

    def test_table_with_switch(self, capsys):
        code = _run(EXAMPLES / "table.pb", "--switch", "E=4", "--input", 7)
        assert code == pbsim.EXIT_HALT
        assert capsys.readouterr().out.startswith("+000000000049")

    def test_trace_and_dump(self, capsys):
        _run(EXAMPLES / "sum.pb", "-k", 1, "-k", 2, "--trace", "--dump-memory")
        err = capsys.readouterr().err
        assert "1:00  K 0 0" in err
        assert err.count("\n0 | ") == 1


class TestArguments:

    def test_parse_switch(self):
        assert pbsim.parse_switch("x=7") == ("X", 7)

    @pytest.mark.parametrize("value", ["E", "Q=1", "E=three"])
    def test_parse_switch_rejects(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            pbsim.parse_switch(value)

    def test_switch_out_of_range(self, tmp_path, capsys):
        assert _run(_program(tmp_path, "P\n"), "--switch", "F=16") == pbsim.EXIT_ALARM

    def test_unknown_profile_rejected_by_argparse(self, tmp_path):
        with pytest.raises(SystemExit):
            _run(_program(tmp_path, "P\n"), "--profile", "tiny")

    def test_long_board_profile(self, tmp_path):
        text = "P\n" * 20
        assert _run(_program(tmp_path, text), "--profile", "long-board") == pbsim.EXIT_HALT
