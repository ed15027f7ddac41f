"""
Pinboard Emulator - Keyboard Peripheral

The K opcode stops the machine until the operator keys in a number.
For scripted runs, values are queued here ahead of time with inject();
run() takes one each time the machine asks for input.
"""

from collections import deque
from typing import Deque


class KeyboardPeripheral:
    """FIFO of numbers waiting to be keyed in."""

    def __init__(self):
        self._queue: Deque[int] = deque()
        self.keyed: list = []

    def inject(self, *values: int):
        self._queue.extend(int(v) for v in values)

    @property
    def has_input(self) -> bool:
        return bool(self._queue)

    def take(self) -> int:
        value = self._queue.popleft()
        self.keyed.append(value)
        return value

    def pending(self) -> int:
        return len(self._queue)

    def reset(self):
        self._queue.clear()
        self.keyed.clear()
