"""White-box tests for the arithmetic engine.

Each class targets one decision point of the engine: the machine fast
path, promotion to the digit algorithms, and shrinking results back to
native form.  The digit algorithms are also tested directly.
"""
from __future__ import annotations

import pytest

from arithmetic import (
    ArithmeticEngine,
    Ordering,
    add_magnitudes,
    compare_magnitudes,
    divmod_magnitudes,
    exponent_bits,
    mul_magnitudes,
    sub_magnitudes,
)
from bounds import INT32, INT64, Bounds
from errors import DivisionByZeroError, InvalidExponentError, InvalidOperandError
from operand import Extended, Native, Sign

BIG = 999999999999999999999999999


def digits(n: int) -> tuple[int, ...]:
    return tuple(int(c) for c in str(n))


# ===================================================================
# Magnitude algorithms
# ===================================================================

class TestMagnitudes:

    def test_compare_by_length_first(self):
        assert compare_magnitudes((9, 9), (1, 0, 0)) == -1
        assert compare_magnitudes((1, 0, 0), (9, 9)) == 1

    def test_compare_lexicographic(self):
        assert compare_magnitudes((1, 2, 3), (1, 2, 4)) == -1
        assert compare_magnitudes((1, 2, 3), (1, 2, 3)) == 0
        assert compare_magnitudes((2, 0, 0), (1, 9, 9)) == 1

    def test_add_with_carry_chain(self):
        assert add_magnitudes((9, 9, 9), (1,)) == (1, 0, 0, 0)

    def test_add_zero(self):
        assert add_magnitudes((0,), (0,)) == (0,)
        assert add_magnitudes((4, 2), (0,)) == (4, 2)

    def test_sub_with_borrow_chain(self):
        assert sub_magnitudes((1, 0, 0, 0), (1,)) == (9, 9, 9)

    def test_sub_strips_leading_zeros(self):
        assert sub_magnitudes((1, 0, 5), (1, 0, 0)) == (5,)
        assert sub_magnitudes((4, 2), (4, 2)) == (0,)

    def test_mul(self):
        assert mul_magnitudes((1, 2), (1, 2)) == (1, 4, 4)
        assert mul_magnitudes((9, 9, 9), (9, 9, 9)) == digits(999 * 999)
        assert mul_magnitudes((0,), (1, 2, 3)) == (0,)

    def test_mul_internal_zero_digits(self):
        assert mul_magnitudes((1, 0, 0, 1), (1, 0, 1)) == digits(1001 * 101)

    def test_divmod(self):
        assert divmod_magnitudes(digits(100), (3,)) == ((3, 3), (1,))
        assert divmod_magnitudes(digits(BIG), (4,)) == (digits(BIG // 4), (3,))

    def test_divmod_smaller_dividend(self):
        assert divmod_magnitudes((5,), (1, 2)) == ((0,), (5,))

    def test_divmod_exact(self):
        assert divmod_magnitudes(digits(10**30), digits(10**15)) == (digits(10**15), (0,))

    def test_exponent_bits(self):
        assert exponent_bits(Extended.from_int(6)) == [0, 1, 1]
        assert exponent_bits(Extended.from_int(1)) == [1]
        assert exponent_bits(Extended.from_int(0)) == []
        big = 2**80 + 5
        bits = exponent_bits(Extended.from_int(big))
        assert sum(bit << i for i, bit in enumerate(bits)) == big


# ===================================================================
# Fast path, promotion and shrinking
# ===================================================================

class TestRepresentation:

    def test_fast_path_stays_native(self, engine):
        """Branch: both native, result fits - machine arithmetic."""
        result = engine.add(2, 3)
        assert isinstance(result, Native)
        assert result == 5

    def test_add_overflow_promotes(self, engine):
        """Branch: both native, result overflows INT64 - digit algorithm."""
        result = engine.add(INT64.hi, 1)
        assert isinstance(result, Extended)
        assert int(result) == INT64.hi + 1

    def test_sub_overflow_promotes(self, engine):
        result = engine.sub(INT64.lo, 1)
        assert isinstance(result, Extended)
        assert int(result) == INT64.lo - 1

    def test_mul_overflow_promotes(self, engine):
        result = engine.mul(INT64.hi, 2)
        assert isinstance(result, Extended)
        assert int(result) == INT64.hi * 2

    def test_narrow_native_range(self, int8_engine):
        """Branch: native operand outside the engine's range - digit algorithm."""
        assert isinstance(int8_engine.add(127, 0), Native)
        assert isinstance(int8_engine.add(127, 1), Extended)
        result = int8_engine.sub(300, 200)
        assert isinstance(result, Native)
        assert result == 100

    def test_extended_result_shrinks(self, engine):
        """Branch: extended operands, result fits - back to native."""
        result = engine.sub(BIG + 5, BIG)
        assert isinstance(result, Native)
        assert result.value == 5

    def test_negate_int64_min_promotes(self, engine):
        result = engine.negate(INT64.lo)
        assert isinstance(result, Extended)
        assert int(result) == -INT64.lo

    def test_div_int64_min_by_minus_one_promotes(self, engine):
        result = engine.div(INT64.lo, -1)
        assert isinstance(result, Extended)
        assert int(result) == 2**63

    def test_narrow_native_range(self, tiny_engine):
        """With native [-8, 7], 7 + 1 is already extended."""
        assert isinstance(tiny_engine.add(3, 4), Native)
        result = tiny_engine.add(7, 1)
        assert isinstance(result, Extended)
        assert result == 8

    def test_native_outside_engine_range_uses_digits(self, tiny_engine):
        """A Native operand beyond the engine range skips the fast path."""
        result = tiny_engine.sub(Native(100), Native(95))
        assert isinstance(result, Native)
        assert result == 5

    def test_engine_range_must_fit_int64(self):
        with pytest.raises(ValueError, match="INT64"):
            ArithmeticEngine(native=Bounds(lo=0, hi=2**64))

    def test_engine_accepts_narrower_range(self):
        assert ArithmeticEngine(native=INT32).native == INT32

    def test_results_are_fresh_values(self, engine):
        a = Extended.from_int(BIG)
        result = engine.add(a, 0)
        assert result == a
        assert a == BIG  # operand untouched


# ===================================================================
# Add / Sub
# ===================================================================

class TestAddSub:

    def test_magnitude_boundary(self, engine):
        assert engine.add(BIG, 2) == 1000000000000000000000000001

    def test_sign_boundary(self, engine):
        assert engine.sub(1000000000000000000000000001, 2) == BIG

    @pytest.mark.parametrize("a,b", [
        (BIG, -BIG), (-BIG, 1), (1, -BIG), (-BIG, -BIG), (BIG, -(BIG + 1)),
        (0, -BIG), (-BIG, 0), (10**40, -(10**39)),
    ])
    def test_mixed_signs(self, engine, a, b):
        assert int(engine.add(a, b)) == a + b
        assert int(engine.sub(a, b)) == a - b

    def test_sub_swaps_when_second_is_larger(self, engine):
        result = engine.sub(5, BIG)
        assert int(result) == 5 - BIG
        assert result.sign is Sign.NEGATIVE

    def test_sub_equal_is_zero(self, engine):
        result = engine.sub(BIG, BIG)
        assert isinstance(result, Native)
        assert result.is_zero

    def test_literal_strings_accepted(self, engine):
        assert engine.add("999999999999999999999999999", "2") == BIG + 2

    def test_invalid_operand(self, engine):
        with pytest.raises(InvalidOperandError):
            engine.add(1.5, 2)


# ===================================================================
# Mul
# ===================================================================

class TestMul:

    def test_documented_example(self, engine):
        assert engine.mul(BIG, 2) == 1999999999999999999999999998

    @pytest.mark.parametrize("a,b", [(BIG, -3), (-BIG, -BIG), (-BIG, BIG), (INT64.lo, INT64.lo)])
    def test_signs(self, engine, a, b):
        assert int(engine.mul(a, b)) == a * b

    def test_zero(self, engine):
        result = engine.mul(BIG, 0)
        assert result.is_zero
        assert result.sign is Sign.ZERO
        assert engine.mul(-BIG, 0) == 0


# ===================================================================
# Div / Mod
# ===================================================================

class TestDivMod:

    def test_documented_examples(self, engine):
        assert engine.div(99, 3) == 33
        assert engine.div(BIG, 4) == 249999999999999999999999999
        assert engine.mod(100, 3) == 1
        assert engine.mod(BIG, 4) == 3

    @pytest.mark.parametrize("a,b,q,r", [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (6, 3, 2, 0),
        (-6, 3, -2, 0),
        (0, 5, 0, 0),
        (3, 7, 0, 3),
        (-3, 7, 0, -3),
    ])
    def test_truncating_native(self, engine, a, b, q, r):
        assert engine.div(a, b) == q
        assert engine.mod(a, b) == r

    @pytest.mark.parametrize("a,b,q,r", [
        (70, 20, 3, 10),
        (-70, 20, -3, -10),
        (70, -20, -3, 10),
        (-70, -20, 3, -10),
    ])
    def test_truncating_extended(self, tiny_engine, a, b, q, r):
        """Same sign rules through the digit path (operands outside [-8, 7])."""
        assert tiny_engine.div(a, b) == q
        assert tiny_engine.mod(a, b) == r

    @pytest.mark.parametrize("a,b", [
        (BIG, 7), (-BIG, 7), (BIG, -7), (-BIG, -7),
        (BIG, BIG), (BIG, BIG + 1), (10**50 + 3, 10**25), (-(10**50) - 3, 10**25 + 1),
    ])
    def test_extended_against_reference(self, engine, a, b):
        q, r = engine.divmod(a, b)
        assert int(b) * int(q) + int(r) == a
        assert abs(int(r)) < abs(b)
        assert int(r) == 0 or (int(r) < 0) == (a < 0)

    def test_divmod_returns_both(self, engine):
        assert engine.divmod(-7, 2) == (Native(-3), Native(-1))

    @pytest.mark.parametrize("op", ["div", "mod", "divmod"])
    @pytest.mark.parametrize("a", [0, 1, -1, BIG])
    def test_division_by_zero(self, engine, op, a):
        with pytest.raises(DivisionByZeroError):
            getattr(engine, op)(a, 0)

    def test_division_by_extended_zero(self, engine):
        with pytest.raises(DivisionByZeroError):
            engine.div(BIG, Extended(Sign.ZERO, (0,)))

    def test_division_by_zero_is_zero_division_error(self, engine):
        with pytest.raises(ZeroDivisionError):
            engine.mod(1, 0)


# ===================================================================
# Power
# ===================================================================

class TestPower:

    def test_two_to_the_128(self, engine):
        assert engine.power(2, 128) == 340282366920938463463374607431768211456

    def test_zero_exponent(self, engine):
        assert engine.power(BIG, 0) == 1
        assert engine.power(-5, 0) == 1

    def test_zero_to_the_zero_is_one(self, engine):
        assert engine.power(0, 0) == 1

    def test_zero_base(self, engine):
        assert engine.power(0, 5) == 0

    def test_unit_bases_with_huge_exponent(self, engine):
        huge = 10**40 + 1
        assert engine.power(1, huge) == 1
        assert engine.power(-1, huge) == -1
        assert engine.power(-1, huge + 1) == 1

    @pytest.mark.parametrize("base,exp", [(3, 40), (-3, 41), (-7, 20), (BIG, 3), (10, 100)])
    def test_against_reference(self, engine, base, exp):
        assert int(engine.power(base, exp)) == base**exp

    def test_extended_exponent(self, engine):
        assert engine.power(2, Extended.from_int(70)) == 2**70

    @pytest.mark.parametrize("exp", [-1, -BIG, "-3"])
    def test_negative_exponent(self, engine, exp):
        with pytest.raises(InvalidExponentError):
            engine.power(2, exp)

    @pytest.mark.parametrize("exp", [2.0, 0.5, True, "two", None])
    def test_non_integer_exponent(self, engine, exp):
        with pytest.raises(InvalidExponentError):
            engine.power(2, exp)

    def test_invalid_base_is_operand_error(self, engine):
        with pytest.raises(InvalidOperandError):
            engine.power(2.5, 2)


# ===================================================================
# Negate / Abs
# ===================================================================

class TestSign:

    def test_negate(self, engine):
        assert engine.negate(5) == -5
        assert engine.negate(-BIG) == BIG

    def test_negate_zero(self, engine):
        result = engine.negate(0)
        assert result.is_zero
        assert engine.negate(Extended(Sign.ZERO, (0,))).sign is Sign.ZERO

    def test_abs(self, engine):
        assert engine.absolute(-BIG) == BIG
        assert engine.absolute(BIG) == BIG
        assert engine.absolute(-3) == 3
        assert engine.absolute(0) == 0

    def test_abs_canonicalizes(self, engine):
        result = engine.absolute(Extended(Sign.NEGATIVE, (4,)))
        assert isinstance(result, Native)
        assert result == 4


# ===================================================================
# Ordering
# ===================================================================

class TestOrdering:

    def test_documented_examples(self, engine):
        assert engine.compare(1, 2) == Ordering.LESS_THAN
        assert engine.compare(BIG, 4) == Ordering.GREATER_THAN
        assert engine.compare(BIG, BIG) == Ordering.EQUAL

    def test_ordering_values(self):
        assert [int(o) for o in Ordering] == [-1, 0, 1]

    @pytest.mark.parametrize("a,b,expected", [
        (-BIG, BIG, -1),
        (BIG, -BIG, 1),
        (-BIG, -(BIG - 1), -1),
        (-BIG, 0, -1),
        (0, -BIG, 1),
        (BIG, BIG + 1, -1),
        (-(10**30), -(10**29), -1),
    ])
    def test_extended(self, engine, a, b, expected):
        assert engine.compare(a, b) == expected

    def test_max_min(self, engine):
        assert engine.maximum(BIG, -BIG) == BIG
        assert engine.minimum(BIG, -BIG) == -BIG
        assert engine.maximum(1, 2) == 2
        assert engine.minimum(1, 2) == 1

    def test_max_tie_returns_equal_value(self, engine):
        assert engine.maximum(BIG, BIG) == BIG
        assert engine.minimum(-3, -3) == -3

    def test_predicates(self, engine):
        assert engine.equal(BIG, BIG)
        assert engine.not_equal(BIG, -BIG)
        assert engine.less_than(1, 2)
        assert not engine.less_than(2, 2)
        assert engine.less_than_or_equal(2, 2)
        assert not engine.less_than_or_equal(3, 2)
        assert engine.greater_than(3, 2)
        assert not engine.greater_than(2, 2)
        assert engine.greater_than_or_equal(2, 2)
        assert not engine.greater_than_or_equal(1, 2)

    def test_predicates_return_bool(self, engine):
        assert engine.equal(1, 1) is True
        assert engine.less_than(2, 1) is False
