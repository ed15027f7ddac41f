from .words import DecimalWord, OutOfRange, Switch16, Word11, Word12
from .regs import Registers
from .decoder import Instruction, Opcode, parse_instruction
