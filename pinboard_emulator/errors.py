"""
Pinboard Emulator - Execution Error Taxonomy

Every condition that stops a running program is an ExecutionError.
The emulator's step() catches these, records the error on the machine
and moves the status to ALARM. Nothing below is retried.

  MissingPinboard     current (or target) slot holds no pinboard
  MissingInstruction  position is not wired
  IllegalInstruction  opcode/operand combination the machine cannot execute
  InvalidMemory       address outside the memory grid or pinboard
  Overflow            result does not fit the destination word
  DivisionByZero      divisor word is zero
"""

from typing import Optional


class ExecutionError(Exception):
    """Base class for errors that put the machine into ALARM."""


class MissingPinboard(ExecutionError):
    def __init__(self, slot: int):
        self.slot = slot
        super().__init__(f"No pinboard loaded in slot {slot}")


class MissingInstruction(ExecutionError):
    def __init__(self, slot: int, position: int, message: Optional[str] = None):
        self.slot = slot
        self.position = position
        super().__init__(message or f"No instruction wired at {slot}:{position:02d}")


class IllegalInstruction(MissingInstruction):
    """Instruction is wired but its operand combination is not executable."""

    def __init__(self, slot: int, position: int, instruction):
        self.instruction = instruction
        super().__init__(
            slot, position,
            f"Illegal operand combination '{instruction}' at {slot}:{position:02d}",
        )


class InvalidMemory(ExecutionError):
    def __init__(self, tens, ones, what: str = "memory", message: Optional[str] = None):
        self.tens = tens
        self.ones = ones
        super().__init__(message or f"Invalid {what} address ({tens}, {ones})")


class Overflow(ExecutionError):
    def __init__(self, word_type: str, value: int):
        self.word_type = word_type
        self.value = value
        super().__init__(f"{word_type} overflow: {value}")


class DivisionByZero(ExecutionError):
    def __init__(self):
        super().__init__("Division by zero")


class MachineStateError(Exception):
    """Driver asked for something the current machine status does not allow."""
