"""
Pinboard Emulator - Paired-Register Arithmetic

Multiplication and division use the accumulator and the secondary
accumulator as one double-width register, the way the desk machine
spreads a long product over both.

  multiply:  |product| = high * 10**12 + low
             accumulator <- low, secondary <- high, both carry the sign
  divide:    accumulator = quotient * divisor + remainder
             accumulator <- quotient, secondary <- remainder
             quotient truncates toward zero, remainder has the dividend's sign

Each function returns a tuple (accumulator_word, secondary_word) and
never touches registers itself. The caller applies both or neither.
"""

from typing import Tuple

from .words import Word11, Word12
from ..errors import DivisionByZero, Overflow

SPLIT = 10 ** Word12.DIGITS


def multiply(acc: Word12, operand: Word12) -> Tuple[Word12, Word11]:
    product = int(acc) * int(operand)
    sign = -1 if product < 0 else 1
    high, low = divmod(abs(product), SPLIT)
    if not Word11.fits(high):
        raise Overflow('Word11', sign * high)
    return Word12(sign * low), Word11(sign * high)


def divide(acc: Word12, divisor: Word12) -> Tuple[Word12, Word11]:
    dividend = int(acc)
    d = int(divisor)
    if d == 0:
        raise DivisionByZero()
    quotient = abs(dividend) // abs(d)
    if (dividend < 0) != (d < 0):
        quotient = -quotient
    remainder = dividend - quotient * d
    if not Word11.fits(remainder):
        raise Overflow('Word11', remainder)
    return Word12(quotient), Word11(remainder)


def add(acc: Word12, operand: Word12) -> Word12:
    return acc.add(operand)


def sub(acc: Word12, operand: Word12) -> Word12:
    return acc.sub(operand)
