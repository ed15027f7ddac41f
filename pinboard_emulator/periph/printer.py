"""
Pinboard Emulator - Printer Peripheral

The P opcode prints the accumulator, with the secondary accumulator
alongside. Every event is kept in `printed` for inspection and passed
to an optional sink callable (the CLI uses it to write to stdout).

Line format:
  +000000000042  +00000000000
  accumulator    secondary
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from ..cpu.words import Word11, Word12


@dataclass(frozen=True)
class PrintEvent:
    accumulator: Word12
    secondary: Word11
    slot: int
    position: int


def format_event(event: PrintEvent) -> str:
    return f"{event.accumulator}  {event.secondary}"


class PrinterPeripheral:
    """Output side of the machine."""

    def __init__(self, sink: Optional[Callable[[PrintEvent], None]] = None):
        self.sink = sink
        self.printed: List[PrintEvent] = []

    def emit(self, event: PrintEvent):
        self.printed.append(event)
        if self.sink is not None:
            self.sink(event)

    def values(self) -> List[int]:
        return [int(e.accumulator) for e in self.printed]

    def lines(self) -> List[str]:
        return [format_event(e) for e in self.printed]

    def reset(self):
        self.printed.clear()
