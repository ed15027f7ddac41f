"""
Pinboard Emulator - Register Set

Register model:
  ACC  - accumulator, Word12 (12 digits + sign)
  B    - secondary accumulator, Word11 (11 digits + sign)
         receives the high half of a product and the remainder of a quotient
  E F  - control registers (sense switches), Switch16 0..15
  X Y  - control registers (sense switches), Switch16 0..15

The control registers replace placeholder digits in an instruction's
address before it executes. Tens positions accept E and X, ones
positions accept E, F and Y.
"""

from .words import Switch16, Word11, Word12

CONTROL_REGISTERS = ('E', 'F', 'X', 'Y')


class Registers:
    """Accumulators and control registers of the machine."""

    __slots__ = ('ACC', 'B', 'E', 'F', 'X', 'Y')

    def __init__(self):
        self.ACC: Word12 = Word12(0)
        self.B: Word11 = Word11(0)
        self.E: Switch16 = Switch16(0)
        self.F: Switch16 = Switch16(0)
        self.X: Switch16 = Switch16(0)
        self.Y: Switch16 = Switch16(0)

    def control(self, name: str) -> int:
        """Current value of control register E, F, X or Y."""
        if name not in CONTROL_REGISTERS:
            raise KeyError(f"Unknown control register: {name}")
        return int(getattr(self, name))

    def set_control(self, name: str, value: int):
        """Set a control register; raises OutOfRange outside 0..15."""
        if name not in CONTROL_REGISTERS:
            raise KeyError(f"Unknown control register: {name}")
        setattr(self, name, Switch16(value))

    def snapshot(self) -> tuple:
        return (self.ACC, self.B, self.E, self.F, self.X, self.Y)

    def display(self) -> str:
        return (f"ACC={self.ACC} B={self.B} "
                f"E={int(self.E):2d} F={int(self.F):2d} "
                f"X={int(self.X):2d} Y={int(self.Y):2d}")

    def reset(self):
        self.ACC = Word12(0)
        self.B = Word11(0)
        self.E = Switch16(0)
        self.F = Switch16(0)
        self.X = Switch16(0)
        self.Y = Switch16(0)
