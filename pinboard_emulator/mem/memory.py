"""
Pinboard Emulator - 10x10 Decimal Memory

Memory map:
  100 cells of Word12, addressed by (tens, ones), each digit 0-9.

    tens ->  row
    ones ->  column

Every access goes through get(), which range-checks both digits and
returns the cell handle. read() and write() are thin wrappers over it,
so no opcode reaches a cell without the bounds check.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..cpu.words import Word12
from ..errors import InvalidMemory

ROWS = 10
COLS = 10

Address = Tuple[int, int]


class MemoryCell:
    """Mutable handle to one memory word."""

    __slots__ = ('address', 'word', '_memory')

    def __init__(self, memory: 'Memory', address: Address):
        self._memory = memory
        self.address = address
        self.word: Word12 = Word12(0)

    def read(self) -> Word12:
        return self.word

    def write(self, word) -> None:
        if not isinstance(word, Word12):
            word = Word12(word)
        old = self.word
        self.word = word
        self._memory._notify(self.address, old, word)

    def __repr__(self) -> str:
        return f"MemoryCell({self.address[0]}{self.address[1]}={self.word})"


class Memory:
    """Ten rows of ten Word12 cells with write watchpoints."""

    def __init__(self):
        self._cells: List[List[MemoryCell]] = [
            [MemoryCell(self, (t, o)) for o in range(COLS)] for t in range(ROWS)
        ]
        # (tens, ones) -> [callback(address, old_word, new_word)]
        self._watchpoints: Dict[Address, List[Callable]] = {}

    # --- Core access ---

    def get(self, tens, ones) -> MemoryCell:
        """Return the cell at (tens, ones) or raise InvalidMemory."""
        if not (_is_digit(tens, ROWS) and _is_digit(ones, COLS)):
            raise InvalidMemory(tens, ones)
        return self._cells[tens][ones]

    def read(self, tens, ones) -> Word12:
        return self.get(tens, ones).read()

    def write(self, tens, ones, word) -> None:
        self.get(tens, ones).write(word)

    def __iter__(self):
        for row in self._cells:
            yield from row

    # --- Bulk load ---

    def load_words(self, values: Dict[Address, int]):
        """Preload cells from {(tens, ones): value}. Fires watchpoints."""
        for (tens, ones), value in values.items():
            self.write(tens, ones, value)

    def clear(self):
        for cell in self:
            cell.word = Word12(0)

    # --- Watchpoints ---

    def add_watchpoint(self, tens: int, ones: int, callback: Callable):
        """callback(address, old_word, new_word) runs after each write to the cell."""
        self.get(tens, ones)
        self._watchpoints.setdefault((tens, ones), []).append(callback)

    def remove_watchpoint(self, tens: int, ones: int, callback: Optional[Callable] = None):
        """Remove a watchpoint. If callback is None, removes all on that cell."""
        address = (tens, ones)
        if address not in self._watchpoints:
            return
        if callback is None:
            del self._watchpoints[address]
        else:
            self._watchpoints[address] = [
                cb for cb in self._watchpoints[address] if cb != callback
            ]

    def _notify(self, address: Address, old: Word12, new: Word12):
        for cb in self._watchpoints.get(address, ()):
            cb(address, old, new)

    # --- Snapshots ---

    def snapshot(self) -> Tuple[int, ...]:
        """Row-major copy of every cell value."""
        return tuple(int(cell.word) for cell in self)

    @staticmethod
    def diff_snapshots(snap_a: Iterable[int], snap_b: Iterable[int]) -> Dict[Address, tuple]:
        """Compare two snapshots, return {(tens, ones): (old, new)} for changes."""
        changes = {}
        for i, (a, b) in enumerate(zip(snap_a, snap_b)):
            if a != b:
                changes[divmod(i, COLS)] = (a, b)
        return changes

    # --- Dump ---

    def dump(self, nonzero_only: bool = False) -> str:
        """One line per row: 'tens | cell0 cell1 ...'."""
        lines = []
        for t, row in enumerate(self._cells):
            if nonzero_only and not any(cell.word for cell in row):
                continue
            lines.append(f"{t} | " + ' '.join(str(cell.word) for cell in row))
        return '\n'.join(lines)


def _is_digit(value, limit: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < limit
