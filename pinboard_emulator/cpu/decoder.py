"""
Pinboard Emulator - Instruction Model, Parser and Digit Resolution

An instruction is one line of pinboard wiring:

    <opcode> [<tens> [<ones>]]

Opcodes (closed set of 14):
  K  keyboard        W  write           R  read            B  accumulator -> B
  P  print           +  add             -  subtract        ×  multiply
  ÷  divide          A  alter           U  transfer        C  conditional transfer
  H  home            S  step

Address digits:
  tens   0-9, or E / X          (placeholder: substitute control register)
  ones   0-15, or E / F / Y     (placeholder: substitute control register)
         or * / V               (parsed, but the machine cannot execute them)

Operand shapes per opcode (checked at execution, not at parse time):
  NONE   no operand
  T      tens only
  TO     tens and ones
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple, Union


# ──────────────────────────────────────────────
# Parse errors
# ──────────────────────────────────────────────

class ParseError(Exception):
    """Raised when a line of wiring is not a valid instruction."""

    KIND = "Unable to parse instruction"

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"{self.KIND}: {token!r}")


class UnknownOpcode(ParseError):
    KIND = "Unknown opcode"


class UnknownTens(ParseError):
    KIND = "Unknown tens"


class UnknownOnes(ParseError):
    KIND = "Unknown ones"


class MalformedInstruction(ParseError):
    KIND = "Unable to parse instruction"


class UnsupportedOperand(Exception):
    """Placeholder digit whose operation the machine does not define.

    Raised while decoding, before the instruction executes. The machine
    status is left alone, so this is not an alarm.
    """

    def __init__(self, instruction: 'Instruction', symbol: str):
        self.instruction = instruction
        self.symbol = symbol
        super().__init__(f"Unsupported ones placeholder {symbol!r} in '{instruction}'")


# ──────────────────────────────────────────────
# Vocabularies
# ──────────────────────────────────────────────

class Opcode(enum.Enum):
    K = "K"         # Keyboard
    W = "W"         # Write accumulator to memory
    R = "R"         # Read memory into accumulator
    B = "B"         # Accumulator -> secondary accumulator
    P = "P"         # Print
    PLUS = "+"
    MINUS = "-"
    MULT = "×"
    DIV = "÷"
    A = "A"         # Alter
    U = "U"         # Unconditional transfer
    C = "C"         # Conditional transfer
    H = "H"         # Home
    S = "S"         # Step

    def __str__(self) -> str:
        return self.value


class TensRegister(enum.Enum):
    E = "E"
    X = "X"

    def __str__(self) -> str:
        return self.value


class OnesRegister(enum.Enum):
    E = "E"
    F = "F"
    Y = "Y"
    STAR = "*"
    V = "V"

    def __str__(self) -> str:
        return self.value


Tens = Union[int, TensRegister]
Ones = Union[int, OnesRegister]

TENS_MAX = 9
ONES_MAX = 15

# Symbol -> opcode. The typographic minus sign is the same key as '-'.
OPCODE_SYMBOLS: Dict[str, Opcode] = {op.value: op for op in Opcode}
OPCODE_SYMBOLS["−"] = Opcode.MINUS

# Ones placeholders with no register behind them.
UNRESOLVED_ONES = (OnesRegister.STAR, OnesRegister.V)


# ──────────────────────────────────────────────
# Operand shapes
# ──────────────────────────────────────────────

NONE = 'NONE'
T = 'T'
TO = 'TO'

OPERAND_SHAPES: Dict[Opcode, Tuple[str, ...]] = {
    Opcode.K:     (NONE, TO),
    Opcode.W:     (TO,),
    Opcode.R:     (TO,),
    Opcode.B:     (NONE,),
    Opcode.P:     (NONE,),
    Opcode.PLUS:  (TO,),
    Opcode.MINUS: (TO,),
    Opcode.MULT:  (TO,),
    Opcode.DIV:   (TO,),
    Opcode.A:     (TO,),
    Opcode.U:     (T, TO),
    Opcode.C:     (T, TO),
    Opcode.H:     (NONE,),
    Opcode.S:     (T, TO),
}


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    tens: Optional[Tens] = None
    ones: Optional[Ones] = None

    @property
    def shape(self) -> Optional[str]:
        """Operand shape, or None for ones-without-tens."""
        if self.tens is None:
            return NONE if self.ones is None else None
        return T if self.ones is None else TO

    @property
    def resolved(self) -> bool:
        return not isinstance(self.tens, TensRegister) and not isinstance(self.ones, OnesRegister)

    def accepts_operands(self) -> bool:
        return self.shape in OPERAND_SHAPES[self.opcode]

    def with_address(self, tens: int, ones: int) -> 'Instruction':
        """Copy of this instruction with new literal address digits."""
        return replace(self, tens=tens, ones=ones)

    def __str__(self) -> str:
        parts = [str(self.opcode)]
        if self.tens is not None:
            parts.append(str(self.tens))
        if self.ones is not None:
            parts.append(str(self.ones))
        return " ".join(parts)


# ──────────────────────────────────────────────
# Parsing
# ──────────────────────────────────────────────

def _literal(token: str, maximum: int) -> Optional[int]:
    if token.startswith('+'):
        token = token[1:]
    if not (token.isascii() and token.isdigit()):
        return None
    value = int(token)
    return value if value <= maximum else None


def parse_opcode(token: str) -> Opcode:
    try:
        return OPCODE_SYMBOLS[token]
    except KeyError:
        raise UnknownOpcode(token) from None


def parse_tens(token: str) -> Tens:
    for reg in TensRegister:
        if token == reg.value:
            return reg
    value = _literal(token, TENS_MAX)
    if value is None:
        raise UnknownTens(token)
    return value


def parse_ones(token: str) -> Ones:
    for reg in OnesRegister:
        if token == reg.value:
            return reg
    value = _literal(token, ONES_MAX)
    if value is None:
        raise UnknownOnes(token)
    return value


def parse_instruction(text: str) -> Instruction:
    """Parse one line of wiring into an Instruction.

    Raises UnknownOpcode / UnknownTens / UnknownOnes for a token outside
    its vocabulary, and MalformedInstruction for an empty line. Tokens
    after the third are ignored.
    """
    parts = text.split()
    if not parts:
        raise MalformedInstruction(text)
    opcode = parse_opcode(parts[0])
    tens = parse_tens(parts[1]) if len(parts) > 1 else None
    ones = parse_ones(parts[2]) if len(parts) > 2 else None
    return Instruction(opcode, tens, ones)


# ──────────────────────────────────────────────
# Special-digit substitution
# ──────────────────────────────────────────────

def resolve(instruction: Instruction, regs) -> Instruction:
    """Return a copy with every placeholder digit replaced by its register.

    The instruction passed in is never modified, so a pinboard position
    inside a loop picks up the new register value on each pass.
    """
    if instruction.resolved:
        return instruction
    tens = instruction.tens
    ones = instruction.ones
    if isinstance(tens, TensRegister):
        tens = regs.control(tens.value)
    if isinstance(ones, OnesRegister):
        if ones in UNRESOLVED_ONES:
            raise UnsupportedOperand(instruction, ones.value)
        ones = regs.control(ones.value)
    return Instruction(instruction.opcode, tens, ones)
