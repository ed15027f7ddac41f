"""
Pinboard Emulator - Pinboard Tests
"""

import pytest

from pinboard_emulator.cpu.decoder import Instruction, Opcode, parse_instruction
from pinboard_emulator.pinboard import DEFAULT_POSITIONS, Pinboard


class TestPinboard:

    def test_from_lines_with_unwired(self):
        board = Pinboard.from_lines(["W 0 0", ".", "R 0 0"])
        assert len(board) == DEFAULT_POSITIONS
        assert board[0] == Instruction(Opcode.W, 0, 0)
        assert board[1] is None
        assert board.last_position == 2

    def test_empty_board(self):
        board = Pinboard()
        assert board.last_position == -1
        assert board.exhausted

    def test_too_many_positions(self):
        with pytest.raises(ValueError):
            Pinboard([parse_instruction("H")] * 5, capacity=4)

    def test_advance_past_last_wired(self):
        board = Pinboard.from_lines(["P", "P"])
        assert board.advance() is True
        assert board.advance() is False
        assert board.exhausted

    def test_home_and_jump(self):
        board = Pinboard.from_lines(["P", "P", "P"])
        board.jump(2)
        assert board.cursor == 2
        board.home()
        assert board.cursor == 0
        with pytest.raises(IndexError):
            board.jump(DEFAULT_POSITIONS)

    def test_alter_replaces_position(self):
        board = Pinboard.from_lines(["W 0 0"])
        board.alter(0, parse_instruction("W 4 2"))
        assert board[0] == Instruction(Opcode.W, 4, 2)
        with pytest.raises(IndexError):
            board.alter(DEFAULT_POSITIONS, parse_instruction("H"))

    def test_listing_marks_cursor(self):
        board = Pinboard.from_lines(["W 0 0", ".", "H"])
        board.jump(2)
        assert board.listing().splitlines() == [" 00  W 0 0", " 01  .", ">02  H"]
