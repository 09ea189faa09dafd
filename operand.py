"""
Operand representation.

An operand is an exact integer in one of two forms:

  Native    a machine-sized integer inside INT64 (the fast path)
  Extended  a sign plus a tuple of decimal digits, most significant first

Both forms are accepted everywhere.  Operands are frozen values; every
arithmetic result is a freshly constructed operand.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from bounds import INT64, Bounds
from errors import InvalidOperandError


_LITERAL = re.compile(r"[+-]?[0-9]+")

# Conversions go through 18-digit chunks; str() and int() refuse very long
# numbers on current interpreters.
_CHUNK = 18
_CHUNK_BASE = 10 ** _CHUNK


def _int_to_digits(magnitude: int) -> tuple[int, ...]:
    chunks = []
    while magnitude >= _CHUNK_BASE:
        magnitude, low = divmod(magnitude, _CHUNK_BASE)
        chunks.append(str(low).zfill(_CHUNK))
    chunks.append(str(magnitude))
    return tuple(int(c) for c in "".join(reversed(chunks)))


def _digits_to_int(digits: tuple[int, ...]) -> int:
    value = 0
    start = 0
    end = len(digits) % _CHUNK or _CHUNK
    while start < len(digits):
        chunk = digits[start:end]
        value = value * 10 ** len(chunk) + int("".join(str(d) for d in chunk))
        start, end = end, end + _CHUNK
    return value


class Sign(Enum):
    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1

    def flipped(self) -> Sign:
        return Sign(-self.value)


# ---------------------------------------------------------------------------
# Native form
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Native:
    """A signed integer inside the INT64 range."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidOperandError(self.value, "native value must be an int")
        if not INT64.contains(self.value):
            raise InvalidOperandError(self.value, "outside the native range")

    @property
    def sign(self) -> Sign:
        if self.value > 0:
            return Sign.POSITIVE
        if self.value < 0:
            return Sign.NEGATIVE
        return Sign.ZERO

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    @property
    def digits(self) -> tuple[int, ...]:
        return tuple(int(c) for c in str(abs(self.value)))

    @property
    def digit_count(self) -> int:
        return len(str(abs(self.value)))

    def to_extended(self) -> Extended:
        return Extended.from_digits(self.sign, self.digits)

    def to_native_if_representable(self, bounds: Bounds = INT64) -> Operand:
        if bounds.contains(self.value):
            return self
        return self.to_extended()

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        return _same_value(self, other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return str(self.value)


# ---------------------------------------------------------------------------
# Extended form
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Extended:
    """
    A signed integer of unbounded magnitude.

    ``digits`` holds base-10 digits, most significant first, with no
    leading zeros; zero is the single digit ``(0,)`` with ``Sign.ZERO``.
    Use ``from_digits`` to build one from unnormalized input.
    """

    sign: Sign
    digits: tuple[int, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.sign, Sign):
            raise InvalidOperandError(self.sign, "sign must be a Sign")
        if not isinstance(self.digits, tuple) or not self.digits:
            raise InvalidOperandError(self.digits, "digits must be a non-empty tuple")
        for d in self.digits:
            if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 9:
                raise InvalidOperandError(self.digits, f"bad digit {d!r}")
        if len(self.digits) > 1 and self.digits[0] == 0:
            raise InvalidOperandError(self.digits, "leading zero digit")
        zero_magnitude = self.digits == (0,)
        if zero_magnitude != (self.sign is Sign.ZERO):
            raise InvalidOperandError(
                self.digits, f"sign {self.sign.name} does not match magnitude"
            )

    @classmethod
    def from_digits(cls, sign: Sign, digits) -> Extended:
        """Normalize ``digits`` and build an operand.

        Leading zeros are stripped and a zero magnitude gets ``Sign.ZERO``
        whatever sign was given.  A ``Sign.ZERO`` paired with a non-zero
        magnitude is rejected.
        """
        digits = tuple(digits)
        for d in digits:
            if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 9:
                raise InvalidOperandError(digits, f"bad digit {d!r}")
        start = 0
        while start < len(digits) - 1 and digits[start] == 0:
            start += 1
        digits = digits[start:] or (0,)
        if digits == (0,):
            return cls(Sign.ZERO, (0,))
        if sign is Sign.ZERO:
            raise InvalidOperandError(digits, "ZERO sign with a non-zero magnitude")
        return cls(sign, digits)

    @classmethod
    def from_int(cls, value: int) -> Extended:
        if value > 0:
            sign = Sign.POSITIVE
        elif value < 0:
            sign = Sign.NEGATIVE
        else:
            sign = Sign.ZERO
        return cls(sign, _int_to_digits(abs(value)))

    @property
    def is_zero(self) -> bool:
        return self.sign is Sign.ZERO

    @property
    def digit_count(self) -> int:
        return len(self.digits)

    def to_extended(self) -> Extended:
        return self

    def to_native_if_representable(self, bounds: Bounds = INT64) -> Operand:
        # Cheap rejection on digit count before building the int.
        if self.digit_count > len(str(max(abs(bounds.lo), abs(bounds.hi)))):
            return self
        value = int(self)
        if bounds.contains(value) and INT64.contains(value):
            return Native(value)
        return self

    def __int__(self) -> int:
        magnitude = _digits_to_int(self.digits)
        return -magnitude if self.sign is Sign.NEGATIVE else magnitude

    def __index__(self) -> int:
        return int(self)

    def __eq__(self, other: object) -> bool:
        return _same_value(self, other)

    def __hash__(self) -> int:
        return hash(int(self))

    def __str__(self) -> str:
        text = "".join(str(d) for d in self.digits)
        return "-" + text if self.sign is Sign.NEGATIVE else text


Operand = Union[Native, Extended]


def _same_value(a: Operand, other: object):
    """Value equality across forms; plain ints compare too."""
    if isinstance(other, bool) or not isinstance(other, (Native, Extended, int)):
        return NotImplemented
    if isinstance(other, int):
        other = from_int(int(other))
    x, y = a.to_extended(), other.to_extended()
    return x.sign is y.sign and x.digits == y.digits


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

def from_int(value: int) -> Operand:
    """Build the canonical operand for a Python int."""
    if INT64.contains(value):
        return Native(value)
    return Extended.from_int(value)


def parse_literal(text: str) -> Operand:
    """Parse a signed decimal literal such as ``"-123"``."""
    if not _LITERAL.fullmatch(text):
        raise InvalidOperandError(text, "not a decimal integer literal")
    sign = Sign.NEGATIVE if text[0] == "-" else Sign.POSITIVE
    body = text.lstrip("+-")
    return Extended.from_digits(sign, (int(c) for c in body)).to_native_if_representable()


def to_operand(value: object) -> Operand:
    """Coerce an accepted value to an operand.

    Accepts operands, ints (not bools) and decimal literal strings.
    """
    if isinstance(value, (Native, Extended)):
        return value
    if isinstance(value, bool):
        raise InvalidOperandError(value, "booleans are not operands")
    if isinstance(value, int):
        return from_int(int(value))
    if isinstance(value, str):
        return parse_literal(value)
    raise InvalidOperandError(value)
