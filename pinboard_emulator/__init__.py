"""
Pinboard Emulator
=================
Instruction-set simulator for a plugboard-programmed decimal calculating
machine: 12-digit signed accumulator, 11-digit secondary accumulator,
four sense-switch control registers (E, F, X, Y), a 10x10 word memory
and up to eight removable pinboards holding the program.

Layout:
    cpu/words.py     bounded decimal words (Word12, Word11, Switch16)
    cpu/alu.py       paired-register multiply / divide
    cpu/regs.py      register set
    cpu/decoder.py   opcodes, address digits, parser, placeholder resolution
    mem/memory.py    10x10 memory with bounds-checked get()
    pinboard.py      program board + cursor
    periph/          keyboard queue, printer
    emu.py           fetch-decode-execute and machine status
    loader.py        program text -> pinboards
"""

__version__ = "0.1.0"

from .cpu.decoder import (
    Instruction, Opcode, ParseError, UnknownOnes, UnknownOpcode, UnknownTens,
    MalformedInstruction, UnsupportedOperand, parse_instruction,
)
from .cpu.words import OutOfRange, Switch16, Word11, Word12
from .emu import PinboardEmulator, Status, StopReason
from .errors import (
    DivisionByZero, ExecutionError, IllegalInstruction, InvalidMemory,
    MachineStateError, MissingInstruction, MissingPinboard, Overflow,
)
from .loader import LoadError, load_file, load_program
from .mem.memory import Memory
from .pinboard import Pinboard
