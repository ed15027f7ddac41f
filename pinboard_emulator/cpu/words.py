"""
Pinboard Emulator - Bounded Decimal Words

The machine works in signed decimal, not binary. A word is an integer
limited to a fixed number of decimal digits:

  Word12    +/- 999 999 999 999   accumulator and memory cells
  Word11    +/-  99 999 999 999   secondary accumulator
  Switch16  0 .. 15               sense switches (control registers E F X Y)

Constructing a word from an out-of-range integer raises OutOfRange.
Arithmetic that leaves the range raises Overflow; values never wrap.
"""

from ..errors import Overflow, DivisionByZero


class OutOfRange(ValueError):
    def __init__(self, word_type: str, value):
        self.word_type = word_type
        self.value = value
        super().__init__(f"{value!r} is out of range for {word_type}")


class DecimalWord:
    """Immutable signed decimal integer with an inclusive range."""

    MIN = 0
    MAX = 0
    DIGITS = 0

    __slots__ = ('_value',)

    def __init__(self, value: int = 0):
        if isinstance(value, DecimalWord):
            value = value.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} needs an int, got {type(value).__name__}")
        if not self.MIN <= value <= self.MAX:
            raise OutOfRange(type(self).__name__, value)
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    @classmethod
    def fits(cls, value: int) -> bool:
        return cls.MIN <= value <= cls.MAX

    @classmethod
    def narrow(cls, value) -> 'DecimalWord':
        """Convert an arithmetic result into this width, raising Overflow."""
        value = int(value)
        if not cls.fits(value):
            raise Overflow(cls.__name__, value)
        return cls(value)

    # --- Arithmetic (same-width result) ---

    def add(self, other) -> 'DecimalWord':
        return self.narrow(self._value + int(other))

    def sub(self, other) -> 'DecimalWord':
        return self.narrow(self._value - int(other))

    def mul(self, other) -> 'DecimalWord':
        return self.narrow(self._value * int(other))

    def div(self, other) -> 'DecimalWord':
        """Quotient truncated toward zero, like a desk calculator."""
        divisor = int(other)
        if divisor == 0:
            raise DivisionByZero()
        quotient = abs(self._value) // abs(divisor)
        if (self._value < 0) != (divisor < 0):
            quotient = -quotient
        return self.narrow(quotient)

    # --- Value protocol ---

    @property
    def negative(self) -> bool:
        return self._value < 0

    @property
    def zero(self) -> bool:
        return self._value == 0

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other) -> bool:
        if isinstance(other, DecimalWord):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        """Sign column plus zero-padded digits, e.g. '+000000000042'."""
        sign = '-' if self._value < 0 else '+'
        return f"{sign}{abs(self._value):0{self.DIGITS}d}"


class Word12(DecimalWord):
    DIGITS = 12
    MIN = -999_999_999_999
    MAX = 999_999_999_999
    __slots__ = ()


class Word11(DecimalWord):
    DIGITS = 11
    MIN = -99_999_999_999
    MAX = 99_999_999_999
    __slots__ = ()


class Switch16(DecimalWord):
    DIGITS = 2
    MIN = 0
    MAX = 15
    __slots__ = ()

    def __str__(self) -> str:
        return str(self._value)
