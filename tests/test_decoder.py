"""
Pinboard Emulator - Instruction Parser and Placeholder Resolution Tests
"""

import pytest

from pinboard_emulator.cpu.decoder import (
    Instruction, MalformedInstruction, Opcode, OnesRegister, ParseError,
    TensRegister, UnknownOnes, UnknownOpcode, UnknownTens, UnsupportedOperand,
    OPERAND_SHAPES, parse_instruction, resolve,
)
from pinboard_emulator.cpu.regs import Registers

SYMBOLS = ["K", "W", "R", "B", "P", "+", "-", "×", "÷", "A", "U", "C", "H", "S"]


class TestOpcodes:

    def test_fourteen_opcodes(self):
        assert len(Opcode) == 14
        assert set(OPERAND_SHAPES) == set(Opcode)

    @pytest.mark.parametrize("symbol", SYMBOLS)
    def test_every_symbol_parses(self, symbol):
        assert parse_instruction(symbol).opcode.value == symbol

    @pytest.mark.parametrize("symbol", SYMBOLS)
    @pytest.mark.parametrize("operands,tens,ones", [
        ("", None, None),
        ("7", 7, None),
        ("3 15", 3, 15),
        ("E Y", TensRegister.E, OnesRegister.Y),
        ("X F", TensRegister.X, OnesRegister.F),
    ])
    def test_operand_triple(self, symbol, operands, tens, ones):
        instr = parse_instruction(f"{symbol} {operands}")
        assert (instr.opcode.value, instr.tens, instr.ones) == (symbol, tens, ones)
        assert parse_instruction(str(instr)) == instr

    def test_multiply_symbol_only(self):
        assert parse_instruction("× 0 1").opcode is Opcode.MULT
        with pytest.raises(UnknownOpcode):
            parse_instruction("x 0 1")

    def test_typographic_minus_is_subtract(self):
        assert parse_instruction("− 0 1").opcode is Opcode.MINUS

    def test_unknown_opcode(self):
        with pytest.raises(UnknownOpcode) as exc:
            parse_instruction("Q 1 2")
        assert exc.value.token == "Q"

    def test_opcode_is_case_sensitive(self):
        with pytest.raises(UnknownOpcode):
            parse_instruction("w 0 0")


class TestAddressDigits:

    @pytest.mark.parametrize("token", ["10", "-1", "F", "Y", "*", "V", "a", "٣"])
    def test_bad_tens(self, token):
        with pytest.raises(UnknownTens) as exc:
            parse_instruction(f"W {token} 0")
        assert exc.value.token == token

    @pytest.mark.parametrize("token", ["16", "-1", "X", "99", "Z"])
    def test_bad_ones(self, token):
        with pytest.raises(UnknownOnes) as exc:
            parse_instruction(f"W 0 {token}")
        assert exc.value.token == token

    def test_ones_extended_range(self):
        assert parse_instruction("U 1 15").ones == 15

    def test_unresolved_ones_placeholders_parse(self):
        assert parse_instruction("W 0 *").ones is OnesRegister.STAR
        assert parse_instruction("W 0 V").ones is OnesRegister.V

    def test_leading_zero_literal(self):
        assert parse_instruction("R 09 07") == Instruction(Opcode.R, 9, 7)

    def test_leading_plus_literal(self):
        assert parse_instruction("W +5 +12") == Instruction(Opcode.W, 5, 12)

    @pytest.mark.parametrize("token", ["+", "++5", "+E"])
    def test_plus_needs_digits(self, token):
        with pytest.raises(UnknownTens):
            parse_instruction(f"W {token} 0")


class TestMalformed:

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_empty(self, text):
        with pytest.raises(MalformedInstruction):
            parse_instruction(text)

    def test_tokens_after_third_ignored(self):
        assert parse_instruction("W 0 0 9") == Instruction(Opcode.W, 0, 0)

    def test_all_parse_errors_share_base(self):
        for text in ["", "Q", "W 10", "W 0 16"]:
            with pytest.raises(ParseError):
                parse_instruction(text)


class TestOperandShapes:

    @pytest.mark.parametrize("text,ok", [
        ("W 0 0", True), ("W 0", False), ("W", False),
        ("K", True), ("K 1 2", True), ("K 1", False),
        ("U 2", True), ("U 2 3", True), ("U", False),
        ("H", True), ("H 1", False),
        ("B", True), ("P", True), ("P 0 0", False),
        ("S 3", True), ("S 1 5", True),
    ])
    def test_accepts_operands(self, text, ok):
        assert parse_instruction(text).accepts_operands() is ok

    def test_ones_without_tens_never_accepted(self):
        assert not Instruction(Opcode.K, None, 3).accepts_operands()


class TestResolve:

    def test_literals_unchanged(self):
        instr = parse_instruction("W 1 2")
        assert resolve(instr, Registers()) is instr

    def test_substitutes_registers(self):
        regs = Registers()
        regs.set_control("E", 4)
        regs.set_control("X", 7)
        regs.set_control("F", 12)
        regs.set_control("Y", 9)
        assert resolve(parse_instruction("W E F"), regs) == Instruction(Opcode.W, 4, 12)
        assert resolve(parse_instruction("R X Y"), regs) == Instruction(Opcode.R, 7, 9)
        assert resolve(parse_instruction("R X E"), regs) == Instruction(Opcode.R, 7, 4)

    def test_stored_instruction_not_mutated(self):
        regs = Registers()
        stored = parse_instruction("W E 0")
        regs.set_control("E", 3)
        assert resolve(stored, regs).tens == 3
        regs.set_control("E", 5)
        assert resolve(stored, regs).tens == 5
        assert stored.tens is TensRegister.E

    @pytest.mark.parametrize("symbol", ["*", "V"])
    def test_unresolved_placeholder_unsupported(self, symbol):
        with pytest.raises(UnsupportedOperand) as exc:
            resolve(parse_instruction(f"W 0 {symbol}"), Registers())
        assert exc.value.symbol == symbol
