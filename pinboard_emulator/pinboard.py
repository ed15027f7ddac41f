"""
Pinboard Emulator - Pinboard (program board + cursor)

A pinboard is a fixed number of positions, each either wired with one
instruction or left empty, plus the cursor naming the next position to
execute. The last wired position marks the end of the program: the
machine halts when the cursor is advanced past it.

The only runtime change to the wiring is the Alter opcode, through
alter(). Everything else reads.
"""

from typing import Iterator, List, Optional, Sequence

from .cpu.decoder import Instruction, parse_instruction

DEFAULT_POSITIONS = 16


class Pinboard:
    """Ordered, optionally-wired instruction positions with a cursor."""

    def __init__(self, instructions: Sequence[Optional[Instruction]] = (),
                 capacity: int = DEFAULT_POSITIONS):
        if capacity <= 0:
            raise ValueError(f"Pinboard capacity must be positive, got {capacity}")
        if len(instructions) > capacity:
            raise ValueError(
                f"{len(instructions)} positions do not fit a {capacity}-position pinboard")
        self.capacity = capacity
        self._positions: List[Optional[Instruction]] = list(instructions)
        self._positions.extend([None] * (capacity - len(self._positions)))
        self.cursor = 0

    @classmethod
    def from_lines(cls, lines: Sequence[str], capacity: int = DEFAULT_POSITIONS) -> 'Pinboard':
        """Build a pinboard from instruction text; '.' or '' leaves a position empty."""
        return cls([parse_instruction(line) if line.strip() not in ('', '.') else None
                    for line in lines], capacity)

    # --- Positions ---

    def __len__(self) -> int:
        return self.capacity

    def __getitem__(self, position: int) -> Optional[Instruction]:
        return self._positions[position]

    def __iter__(self) -> Iterator[Optional[Instruction]]:
        return iter(self._positions)

    def contains(self, position: int) -> bool:
        return 0 <= position < self.capacity

    @property
    def last_position(self) -> int:
        """Index of the last wired position, -1 for an empty board."""
        for position in range(self.capacity - 1, -1, -1):
            if self._positions[position] is not None:
                return position
        return -1

    @property
    def exhausted(self) -> bool:
        return self.cursor > self.last_position

    def current(self) -> Optional[Instruction]:
        if not self.contains(self.cursor):
            return None
        return self._positions[self.cursor]

    def alter(self, position: int, instruction: Instruction):
        if not self.contains(position):
            raise IndexError(f"Position {position} outside pinboard of {self.capacity}")
        self._positions[position] = instruction

    # --- Cursor ---

    def home(self):
        self.cursor = 0

    def jump(self, position: int):
        if not self.contains(position):
            raise IndexError(f"Position {position} outside pinboard of {self.capacity}")
        self.cursor = position

    def advance(self, count: int = 1) -> bool:
        """Move the cursor forward; False once it is past the last wired position."""
        self.cursor += count
        return not self.exhausted

    def listing(self) -> str:
        lines = []
        for position, instruction in enumerate(self._positions):
            if position > self.last_position:
                break
            marker = '>' if position == self.cursor else ' '
            lines.append(f"{marker}{position:02d}  {instruction if instruction else '.'}")
        return '\n'.join(lines)
