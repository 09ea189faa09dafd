"""
Arithmetic engine.

Every public operation takes operands in either form and returns a new
operand.  Each one follows the same shape:

  1. Coerce the arguments with ``to_operand``.
  2. Fast path: if every argument is native and inside the engine's
     native bounds, compute with machine integers and keep the result
     native when it still fits.
  3. Promotion: otherwise run the decimal digit algorithm on extended
     forms and shrink the result back to native when it fits.

The digit algorithms below are plain loops over digit tuples.  None of
them recurses, so operand size never affects stack depth.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from bounds import INT64, Bounds
from errors import DivisionByZeroError, InvalidExponentError, InvalidOperandError
from operand import Extended, Native, Operand, Sign, to_operand


Digits = tuple[int, ...]


class Ordering(IntEnum):
    LESS_THAN = -1
    EQUAL = 0
    GREATER_THAN = 1


_ZERO = Extended(Sign.ZERO, (0,))
_ONE = Extended(Sign.POSITIVE, (1,))


# ---------------------------------------------------------------------------
# Magnitude algorithms (unsigned digit tuples, most significant first)
# ---------------------------------------------------------------------------

def _strip(digits) -> Digits:
    """Drop leading zeros, keeping a single zero for an empty magnitude."""
    start = 0
    while start < len(digits) - 1 and digits[start] == 0:
        start += 1
    return tuple(digits[start:]) or (0,)


def compare_magnitudes(a: Digits, b: Digits) -> int:
    """Digit count first, then digits from the most significant end."""
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    if a == b:
        return 0
    return -1 if a < b else 1


def add_magnitudes(a: Digits, b: Digits) -> Digits:
    result = []
    carry = 0
    i, j = len(a) - 1, len(b) - 1
    while i >= 0 or j >= 0 or carry:
        total = carry
        if i >= 0:
            total += a[i]
            i -= 1
        if j >= 0:
            total += b[j]
            j -= 1
        carry, digit = divmod(total, 10)
        result.append(digit)
    result.reverse()
    return _strip(result)


def sub_magnitudes(a: Digits, b: Digits) -> Digits:
    """``a - b`` for magnitudes with ``a >= b``."""
    result = []
    borrow = 0
    j = len(b) - 1
    for i in range(len(a) - 1, -1, -1):
        diff = a[i] - borrow
        if j >= 0:
            diff -= b[j]
            j -= 1
        if diff < 0:
            diff += 10
            borrow = 1
        else:
            borrow = 0
        result.append(diff)
    result.reverse()
    return _strip(result)


def mul_magnitudes(a: Digits, b: Digits) -> Digits:
    """Schoolbook multiplication with a single carry pass at the end."""
    if a == (0,) or b == (0,):
        return (0,)
    # columns[k] accumulates the digit products of weight 10**(len-1-k)
    columns = [0] * (len(a) + len(b))
    for i in range(len(a) - 1, -1, -1):
        da = a[i]
        if da == 0:
            continue
        for j in range(len(b) - 1, -1, -1):
            columns[i + j + 1] += da * b[j]
    carry = 0
    for k in range(len(columns) - 1, -1, -1):
        carry, columns[k] = divmod(columns[k] + carry, 10)
    return _strip(columns)


def divmod_magnitudes(a: Digits, b: Digits) -> tuple[Digits, Digits]:
    """Long division of magnitudes; ``b`` must be non-zero."""
    if compare_magnitudes(a, b) < 0:
        return (0,), a
    multiples = [(0,)]
    for _ in range(9):
        multiples.append(add_magnitudes(multiples[-1], b))

    quotient = []
    remainder: Digits = (0,)
    for digit in a:
        remainder = _strip(remainder + (digit,))
        q = 9
        while compare_magnitudes(multiples[q], remainder) > 0:
            q -= 1
        if q:
            remainder = sub_magnitudes(remainder, multiples[q])
        quotient.append(q)
    return _strip(quotient), remainder


def _divmod_small(a: Digits, divisor: int) -> tuple[Digits, int]:
    quotient = []
    rem = 0
    for d in a:
        rem = rem * 10 + d
        q, rem = divmod(rem, divisor)
        quotient.append(q)
    return _strip(quotient), rem


def exponent_bits(exponent: Extended) -> list[int]:
    """Binary digits of a non-negative exponent, least significant first."""
    bits = []
    digits = exponent.digits
    while digits != (0,):
        digits, bit = _divmod_small(digits, 2)
        bits.append(bit)
    return bits


# ---------------------------------------------------------------------------
# Signed extended algorithms
# ---------------------------------------------------------------------------

def _negate_extended(x: Extended) -> Extended:
    if x.is_zero:
        return x
    return Extended(x.sign.flipped(), x.digits)


def _add_extended(x: Extended, y: Extended) -> Extended:
    if x.is_zero:
        return y
    if y.is_zero:
        return x
    if x.sign is y.sign:
        return Extended.from_digits(x.sign, add_magnitudes(x.digits, y.digits))
    order = compare_magnitudes(x.digits, y.digits)
    if order == 0:
        return _ZERO
    if order > 0:
        return Extended.from_digits(x.sign, sub_magnitudes(x.digits, y.digits))
    # |y| > |x|: swap, and the result takes y's sign
    return Extended.from_digits(y.sign, sub_magnitudes(y.digits, x.digits))


def _mul_extended(x: Extended, y: Extended) -> Extended:
    if x.is_zero or y.is_zero:
        return _ZERO
    sign = Sign.POSITIVE if x.sign is y.sign else Sign.NEGATIVE
    return Extended.from_digits(sign, mul_magnitudes(x.digits, y.digits))


def _divmod_extended(x: Extended, y: Extended) -> tuple[Extended, Extended]:
    q_digits, r_digits = divmod_magnitudes(x.digits, y.digits)
    q_sign = Sign.POSITIVE if x.sign is y.sign else Sign.NEGATIVE
    # Truncating division: the remainder carries the dividend's sign.
    return (
        Extended.from_digits(q_sign, q_digits),
        Extended.from_digits(x.sign, r_digits),
    )


def _compare_extended(x: Extended, y: Extended) -> Ordering:
    if x.sign is not y.sign:
        if x.sign.value < y.sign.value:
            return Ordering.LESS_THAN
        return Ordering.GREATER_THAN
    order = compare_magnitudes(x.digits, y.digits)
    if x.sign is Sign.NEGATIVE:
        order = -order
    return Ordering(order)


def _exponent_operand(value: object) -> Operand:
    try:
        exponent = to_operand(value)
    except InvalidOperandError as e:
        raise InvalidExponentError(value) from e
    if exponent.sign is Sign.NEGATIVE:
        raise InvalidExponentError(value)
    return exponent


# ---------------------------------------------------------------------------
# The engine
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ArithmeticEngine:
    """
    Exact integer arithmetic over native and extended operands.

    ``native`` is the range results are kept native in; it must lie
    inside INT64.  A narrower range changes only the representation of
    results, never their value.
    """

    native: Bounds = INT64

    def __post_init__(self) -> None:
        if not self.native.within(INT64):
            raise ValueError(
                f"native bounds [{self.native.lo}, {self.native.hi}] "
                f"must lie inside INT64"
            )

    # -- internal helpers --------------------------------------------------

    def _machine(self, *operands: Operand) -> tuple[int, ...] | None:
        """Machine values if every operand is native within bounds."""
        values = []
        for op in operands:
            if not isinstance(op, Native) or not self.native.contains(op.value):
                return None
            values.append(op.value)
        return tuple(values)

    def _shrink(self, result: Extended) -> Operand:
        return result.to_native_if_representable(self.native)

    def _canonical(self, op: Operand) -> Operand:
        if isinstance(op, Native) and self.native.contains(op.value):
            return op
        return self._shrink(op.to_extended())

    def _divmod(self, a, b, operation: str) -> tuple[Operand, Operand]:
        a, b = to_operand(a), to_operand(b)
        if b.is_zero:
            raise DivisionByZeroError(operation)
        machine = self._machine(a, b)
        if machine is not None:
            x, y = machine
            # divmod floors; step the quotient back toward zero
            q, r = divmod(x, y)
            if r != 0 and (x < 0) != (y < 0):
                q += 1
                r = x - y * q
            if self.native.contains(q) and self.native.contains(r):
                return Native(q), Native(r)
        q, r = _divmod_extended(a.to_extended(), b.to_extended())
        return self._shrink(q), self._shrink(r)

    # -- core operations ---------------------------------------------------

    def add(self, a, b) -> Operand:
        a, b = to_operand(a), to_operand(b)
        machine = self._machine(a, b)
        if machine is not None:
            raw = machine[0] + machine[1]
            if self.native.contains(raw):
                return Native(raw)
        return self._shrink(_add_extended(a.to_extended(), b.to_extended()))

    def sub(self, a, b) -> Operand:
        """``a - b``."""
        a, b = to_operand(a), to_operand(b)
        machine = self._machine(a, b)
        if machine is not None:
            raw = machine[0] - machine[1]
            if self.native.contains(raw):
                return Native(raw)
        return self._shrink(
            _add_extended(a.to_extended(), _negate_extended(b.to_extended()))
        )

    def mul(self, a, b) -> Operand:
        a, b = to_operand(a), to_operand(b)
        machine = self._machine(a, b)
        if machine is not None:
            raw = machine[0] * machine[1]
            if self.native.contains(raw):
                return Native(raw)
        return self._shrink(_mul_extended(a.to_extended(), b.to_extended()))

    def divmod(self, a, b) -> tuple[Operand, Operand]:
        """Truncating division: ``a == b * q + r`` with ``sign(r) == sign(a)``."""
        return self._divmod(a, b, "divmod")

    def div(self, a, b) -> Operand:
        return self._divmod(a, b, "div")[0]

    def mod(self, a, b) -> Operand:
        return self._divmod(a, b, "mod")[1]

    def power(self, base, exponent) -> Operand:
        """Exponentiation by squaring.  ``power(0, 0) == 1``."""
        base = to_operand(base)
        exp = _exponent_operand(exponent)
        if exp.is_zero:
            return self._shrink(_ONE)
        if base.is_zero:
            return self._shrink(_ZERO)
        if compare_magnitudes(base.to_extended().digits, (1,)) == 0:
            odd = exp.to_extended().digits[-1] % 2 == 1
            if base.sign is Sign.NEGATIVE and odd:
                return self._canonical(base)
            return self._shrink(_ONE)

        bits = exponent_bits(exp.to_extended())
        result: Operand = self._shrink(_ONE)
        square: Operand = base
        last = len(bits) - 1
        for index, bit in enumerate(bits):
            if bit:
                result = self.mul(result, square)
            if index < last:
                square = self.mul(square, square)
        return result

    # -- sign operations ---------------------------------------------------

    def negate(self, a) -> Operand:
        a = to_operand(a)
        machine = self._machine(a)
        if machine is not None and self.native.contains(-machine[0]):
            return Native(-machine[0])
        return self._shrink(_negate_extended(a.to_extended()))

    def absolute(self, a) -> Operand:
        a = to_operand(a)
        if a.sign is Sign.NEGATIVE:
            return self.negate(a)
        return self._canonical(a)

    # -- ordering ----------------------------------------------------------

    def compare(self, a, b) -> Ordering:
        a, b = to_operand(a), to_operand(b)
        machine = self._machine(a, b)
        if machine is not None:
            x, y = machine
            return Ordering((x > y) - (x < y))
        return _compare_extended(a.to_extended(), b.to_extended())

    def maximum(self, a, b) -> Operand:
        a, b = to_operand(a), to_operand(b)
        return self._canonical(a if self.compare(a, b) >= 0 else b)

    def minimum(self, a, b) -> Operand:
        a, b = to_operand(a), to_operand(b)
        return self._canonical(a if self.compare(a, b) <= 0 else b)

    def equal(self, a, b) -> bool:
        return self.compare(a, b) == Ordering.EQUAL

    def not_equal(self, a, b) -> bool:
        return self.compare(a, b) != Ordering.EQUAL

    def less_than(self, a, b) -> bool:
        return self.compare(a, b) == Ordering.LESS_THAN

    def less_than_or_equal(self, a, b) -> bool:
        return self.compare(a, b) != Ordering.GREATER_THAN

    def greater_than(self, a, b) -> bool:
        return self.compare(a, b) == Ordering.GREATER_THAN

    def greater_than_or_equal(self, a, b) -> bool:
        return self.compare(a, b) != Ordering.LESS_THAN
