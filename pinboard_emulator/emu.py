"""
Pinboard Emulator - Main Emulator Class

Integrates:
  - Registers (cpu/regs.py): ACC, B, control registers E F X Y
  - Memory (mem/memory.py): 10x10 Word12 grid
  - Pinboards (pinboard.py): up to 8 slots, numbered 1-8
  - Decoder (cpu/decoder.py): placeholder resolution, operand shapes
  - Paired-register arithmetic (cpu/alu.py)
  - Peripherals: keyboard queue, printer

Execution model, one instruction per step():
  1. Fetch the instruction under the cursor of the current pinboard
  2. Resolve E/F/X/Y placeholders into a copy of it
  3. Check the operand shape, dispatch to the opcode handler
  4. Advance the cursor by one unless the handler moved it or the
     machine is waiting at the keyboard

Status:
  CONTINUE -> CONTINUE   normal step
  CONTINUE -> KEYBOARD   K executed, waiting for supply_input()
  KEYBOARD -> CONTINUE   input supplied
  CONTINUE -> HALT       cursor advanced or transferred past the last wired position
  CONTINUE -> ALARM      any ExecutionError; state is left as before the step

HALT and ALARM hold until reset(); step() in those states does nothing.

Open choices are policies passed to the constructor:
  condition(regs) -> bool                      what C tests
  transfer_target(emu, tens, ones) -> (slot, position)
                                               where U, C and A point
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Tuple

from .config import DEFAULT_MAX_STEPS, DEFAULT_PROFILE, get_profile
from .cpu import alu
from .cpu.decoder import Instruction, Opcode, resolve
from .cpu.regs import Registers
from .cpu.words import Word11, Word12
from .errors import (
    ExecutionError, IllegalInstruction, InvalidMemory, MachineStateError,
    MissingInstruction, MissingPinboard,
)
from .mem.memory import Memory
from .periph.keyboard import KeyboardPeripheral
from .periph.printer import PrinterPeripheral, PrintEvent
from .pinboard import Pinboard

log = logging.getLogger(__name__)


class Status(Enum):
    CONTINUE = 'Continue'
    KEYBOARD = 'Keyboard'
    HALT = 'Halt'
    ALARM = 'Alarm'


class StopReason(Enum):
    HALT = 'HALT'
    ALARM = 'ALARM'
    KEYBOARD = 'KEYBOARD'   # waiting for input, keyboard queue empty
    BREAK = 'BREAK'
    TIMEOUT = 'TIMEOUT'


# ══════════════════════════════════════════════
# Policies
# ══════════════════════════════════════════════

CONDITIONS: Dict[str, Callable[[Registers], bool]] = {
    'negative': lambda regs: regs.ACC.negative,
    'zero': lambda regs: regs.ACC.zero,
    'nonzero': lambda regs: not regs.ACC.zero,
    'secondary_nonzero': lambda regs: not regs.B.zero,
}


def default_transfer_target(emu: 'PinboardEmulator', tens: int,
                            ones: Optional[int]) -> Tuple[int, int]:
    """tens selects the slot (0 = current slot), ones the position (absent = 0)."""
    if tens == 0:
        slot = emu.current_pinboard
    elif 1 <= tens <= emu.slots:
        slot = tens
    else:
        raise InvalidMemory(tens, ones, what="pinboard")
    return slot, 0 if ones is None else ones


class PinboardEmulator:
    """Pinboard decimal machine.

    Usage:
        emu = PinboardEmulator()
        emu.load_pinboard(1, Pinboard.from_lines(["K", "W 0 0", "P"]))
        emu.keyboard.inject(42)
        reason = emu.run()
        print(emu.printer.lines())
    """

    def __init__(self, profile: str = DEFAULT_PROFILE,
                 printer: Optional[PrinterPeripheral] = None,
                 keyboard: Optional[KeyboardPeripheral] = None,
                 condition=None,
                 transfer_target: Optional[Callable] = None):
        self.profile_name = profile
        self.profile = get_profile(profile)
        self.slots: int = self.profile['pinboard_slots']
        self.positions: int = self.profile['positions']

        # Core components
        self.regs = Registers()
        self.mem = Memory()
        self.pinboards: List[Optional[Pinboard]] = [None] * self.slots
        self.current_pinboard = 1

        # Peripherals
        self.printer = printer if printer is not None else PrinterPeripheral()
        self.keyboard = keyboard if keyboard is not None else KeyboardPeripheral()

        # Policies
        if condition is None:
            condition = self.profile['condition']
        if isinstance(condition, str):
            condition = CONDITIONS[condition]
        self.condition: Callable[[Registers], bool] = condition
        self.transfer_target = transfer_target or default_transfer_target

        # Status
        self.status = Status.CONTINUE
        self.alarm: Optional[ExecutionError] = None
        self.steps = 0
        self._keyboard_target: Optional[Tuple[int, int]] = None

        self._breakpoints: Set[Tuple[int, int]] = set()
        self._trace = False
        self._trace_output: List[str] = []

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Pinboard slots
    # ══════════════════════════════════════════════

    def _check_slot(self, slot: int):
        if not 1 <= slot <= self.slots:
            raise ValueError(f"Pinboard slot must be 1-{self.slots}, got {slot}")

    def load_pinboard(self, slot: int, pinboard: Pinboard):
        """Place a pinboard in a slot, replacing whatever was there.

        Boards larger than the profile's position count do not fit.
        """
        self._check_slot(slot)
        if pinboard.capacity > self.positions:
            raise ValueError(
                f"Pinboard of {pinboard.capacity} positions does not fit profile "
                f"{self.profile_name!r} ({self.positions} positions)")
        self.pinboards[slot - 1] = pinboard
        log.debug("Pinboard loaded in slot %d (%d positions, last wired %d)",
                  slot, pinboard.capacity, pinboard.last_position)

    def load_pinboards(self, boards: Dict[int, Pinboard]):
        for slot, pinboard in sorted(boards.items()):
            self.load_pinboard(slot, pinboard)

    def remove_pinboard(self, slot: int) -> Optional[Pinboard]:
        self._check_slot(slot)
        pinboard, self.pinboards[slot - 1] = self.pinboards[slot - 1], None
        return pinboard

    def select_pinboard(self, slot: int):
        self._check_slot(slot)
        self.current_pinboard = slot

    def pinboard(self, slot: int) -> Pinboard:
        """Pinboard in a slot, or MissingPinboard if the slot is empty."""
        if not 1 <= slot <= self.slots or self.pinboards[slot - 1] is None:
            raise MissingPinboard(slot)
        return self.pinboards[slot - 1]

    # ══════════════════════════════════════════════
    # Operator console
    # ══════════════════════════════════════════════

    def set_switch(self, name: str, value: int):
        """Set control register E, F, X or Y (0-15)."""
        self.regs.set_control(name, value)

    def supply_input(self, value: int) -> Status:
        """Key in a number while the machine waits at a K instruction.

        Raises MachineStateError outside KEYBOARD status and OutOfRange
        if the value is not a Word12; in both cases nothing changes.
        """
        if self.status is not Status.KEYBOARD:
            raise MachineStateError(f"Machine is not waiting for input (status {self.status.value})")
        word = Word12(value)
        try:
            pinboard = self.pinboard(self.current_pinboard)
            if self._keyboard_target is None:
                self.regs.ACC = word
            else:
                self.mem.write(*self._keyboard_target, word)
        except ExecutionError as e:
            self._raise_alarm(e)
            return self.status
        log.debug("Keyed %s", word)
        self._keyboard_target = None
        self._set_status(Status.CONTINUE)
        self._advance(pinboard, 1)
        return self.status

    def reset(self, clear_memory: bool = False):
        """Operator reset: clears registers and alarm, homes every pinboard."""
        self.regs.reset()
        if clear_memory:
            self.mem.clear()
        for pinboard in self.pinboards:
            if pinboard is not None:
                pinboard.home()
        self.current_pinboard = 1
        self.alarm = None
        self.steps = 0
        self._keyboard_target = None
        self._trace_output.clear()
        self._set_status(Status.CONTINUE)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Status:
        """Execute one instruction and return the resulting status.

        Execution errors do not propagate: they put the machine in ALARM
        and are kept in self.alarm. UnsupportedOperand (a '*' or 'V'
        ones digit) does propagate and leaves the machine untouched.
        """
        if self.status is not Status.CONTINUE:
            log.debug("step() ignored in status %s", self.status.value)
            return self.status
        try:
            self._execute_current()
        except ExecutionError as e:
            self._raise_alarm(e)
        return self.status

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """Step until the machine stops, a breakpoint is reached or max_steps run out.

        A KEYBOARD wait is satisfied from the keyboard queue when it has
        input, otherwise run() returns StopReason.KEYBOARD. A breakpoint
        at the position run() starts from is stepped over, so calling
        run() again resumes.
        """
        if max_steps is None:
            max_steps = DEFAULT_MAX_STEPS
        executed = 0
        resuming = True
        while executed < max_steps:
            if self.status is Status.KEYBOARD:
                if not self.keyboard.has_input:
                    return StopReason.KEYBOARD
                self.supply_input(self.keyboard.take())
                resuming = False
                continue
            if self.status is Status.HALT:
                return StopReason.HALT
            if self.status is Status.ALARM:
                return StopReason.ALARM
            if not resuming and self._at_breakpoint():
                return StopReason.BREAK
            resuming = False
            self.step()
            executed += 1
        return StopReason.TIMEOUT

    def _execute_current(self):
        slot = self.current_pinboard
        pinboard = self.pinboard(slot)
        position = pinboard.cursor
        stored = pinboard.current()
        if stored is None:
            raise MissingInstruction(slot, position)

        instr = resolve(stored, self.regs)
        if not instr.accepts_operands():
            raise IllegalInstruction(slot, position, stored)

        if self._trace:
            self._trace_output.append(
                f"{slot}:{position:02d}  {str(stored):8s} {self.regs.display()}")
        log.debug("%d:%02d %s", slot, position, instr)

        relocated = self._dispatch[instr.opcode](instr)
        self.steps += 1
        if self.status is Status.KEYBOARD:
            return
        if not relocated:
            self._advance(pinboard, 1)

    def _advance(self, pinboard: Pinboard, count: int):
        if not pinboard.advance(count):
            self._set_status(Status.HALT)

    def _set_status(self, status: Status):
        if status is not self.status:
            log.info("Status %s -> %s", self.status.value, status.value)
            self.status = status

    def _raise_alarm(self, error: ExecutionError):
        self.alarm = error
        log.warning("ALARM at %s: %s", self.location(), error)
        self._set_status(Status.ALARM)

    def location(self) -> str:
        pinboard = self.pinboards[self.current_pinboard - 1]
        if pinboard is None:
            return f"{self.current_pinboard}:--"
        return f"{self.current_pinboard}:{pinboard.cursor:02d}"

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Each handler works on a resolved instruction. It computes every
    # result before assigning any register, so an ExecutionError leaves
    # the machine as it was. A true return means the cursor was moved.

    def _build_dispatch(self) -> Dict[Opcode, Callable[[Instruction], Optional[bool]]]:
        table = {
            Opcode.K:     self._op_keyboard,
            Opcode.W:     self._op_write,
            Opcode.R:     self._op_read,
            Opcode.B:     self._op_to_secondary,
            Opcode.P:     self._op_print,
            Opcode.PLUS:  self._op_add,
            Opcode.MINUS: self._op_subtract,
            Opcode.MULT:  self._op_multiply,
            Opcode.DIV:   self._op_divide,
            Opcode.A:     self._op_alter,
            Opcode.U:     self._op_transfer,
            Opcode.C:     self._op_conditional_transfer,
            Opcode.H:     self._op_home,
            Opcode.S:     self._op_step,
        }
        missing = [op.name for op in Opcode if op not in table]
        if missing:
            raise RuntimeError(f"No handler for opcodes: {', '.join(missing)}")
        return table

    # ── Input / output ──

    def _op_keyboard(self, instr: Instruction):
        target = None
        if instr.tens is not None:
            target = self.mem.get(instr.tens, instr.ones).address
        self._keyboard_target = target
        self._set_status(Status.KEYBOARD)
        return True

    def _op_print(self, instr: Instruction):
        pinboard = self.pinboard(self.current_pinboard)
        self.printer.emit(PrintEvent(self.regs.ACC, self.regs.B,
                                     self.current_pinboard, pinboard.cursor))

    # ── Memory transfer ──

    def _op_write(self, instr: Instruction):
        self.mem.get(instr.tens, instr.ones).write(self.regs.ACC)

    def _op_read(self, instr: Instruction):
        self.regs.ACC = self.mem.read(instr.tens, instr.ones)

    def _op_to_secondary(self, instr: Instruction):
        self.regs.B = Word11.narrow(self.regs.ACC)

    # ── Arithmetic ──

    def _op_add(self, instr: Instruction):
        self.regs.ACC = alu.add(self.regs.ACC, self.mem.read(instr.tens, instr.ones))

    def _op_subtract(self, instr: Instruction):
        self.regs.ACC = alu.sub(self.regs.ACC, self.mem.read(instr.tens, instr.ones))

    def _op_multiply(self, instr: Instruction):
        low, high = alu.multiply(self.regs.ACC, self.mem.read(instr.tens, instr.ones))
        self.regs.ACC, self.regs.B = low, high

    def _op_divide(self, instr: Instruction):
        quotient, remainder = alu.divide(self.regs.ACC, self.mem.read(instr.tens, instr.ones))
        self.regs.ACC, self.regs.B = quotient, remainder

    # ── Program control ──

    def _resolve_target(self, tens: int, ones: Optional[int]) -> Tuple[int, Pinboard, int]:
        slot, position = self.transfer_target(self, tens, ones)
        pinboard = self.pinboard(slot)
        if not pinboard.contains(position):
            raise InvalidMemory(slot, position, what="pinboard")
        return slot, pinboard, position

    def _op_alter(self, instr: Instruction):
        """Rewire the address digits of another position from the accumulator."""
        slot, pinboard, position = self._resolve_target(instr.tens, instr.ones)
        old = pinboard[position]
        if old is None:
            raise MissingInstruction(slot, position)
        value = int(self.regs.ACC)
        if not 0 <= value <= 99:
            raise InvalidMemory(None, None, message=f"Alter value {value} is not an address 00-99")
        new = old.with_address(*divmod(value, 10))
        if not new.accepts_operands():
            raise IllegalInstruction(slot, position, new)
        pinboard.alter(position, new)
        log.debug("Altered %d:%02d '%s' -> '%s'", slot, position, old, new)

    def _jump(self, instr: Instruction) -> bool:
        slot, pinboard, position = self._resolve_target(instr.tens, instr.ones)
        self.current_pinboard = slot
        pinboard.jump(position)
        if pinboard.exhausted:
            self._set_status(Status.HALT)
        return True

    def _op_transfer(self, instr: Instruction):
        return self._jump(instr)

    def _op_conditional_transfer(self, instr: Instruction):
        if self.condition(self.regs):
            return self._jump(instr)
        return False

    def _op_home(self, instr: Instruction):
        self.pinboard(self.current_pinboard).home()
        return True

    def _op_step(self, instr: Instruction):
        count = instr.tens if instr.ones is None else instr.tens * 10 + instr.ones
        pinboard = self.pinboard(self.current_pinboard)
        if count == 0:
            raise IllegalInstruction(self.current_pinboard, pinboard.cursor, instr)
        self._advance(pinboard, count)
        return True

    # ══════════════════════════════════════════════
    # Breakpoint API
    # ══════════════════════════════════════════════

    def add_breakpoint(self, slot: int, position: int):
        """run() stops before executing this position."""
        self._check_slot(slot)
        self._breakpoints.add((slot, position))

    def remove_breakpoint(self, slot: int, position: int):
        self._breakpoints.discard((slot, position))

    def clear_breakpoints(self):
        self._breakpoints.clear()

    def _at_breakpoint(self) -> bool:
        pinboard = self.pinboards[self.current_pinboard - 1]
        return pinboard is not None and (self.current_pinboard, pinboard.cursor) in self._breakpoints

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Record one line per executed instruction."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def display(self) -> str:
        return f"[{self.status.value}] {self.location()} {self.regs.display()}"
