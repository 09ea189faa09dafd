"""
Executable properties for the operation catalog.

A Spec defines the *contract* a catalog must satisfy.  It is purely
declarative - it says WHAT must be true, not HOW.

Each property is a named predicate.  Its first parameter is the catalog
under test; the remaining parameters are operands, and the factory
infers how many to generate from the predicate's signature.  Plain
Python ints serve as the reference model for exactness.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from errors import DivisionByZeroError, InvalidExponentError
from partial import PLACEHOLDER, PartialBinding


# ---------------------------------------------------------------------------
# Core spec primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property of a catalog."""

    name: str
    description: str
    predicate: Callable[..., bool]

    def check(self, *args: Any) -> bool:
        """Evaluate the property predicate with the given arguments."""
        return self.predicate(*args)


@dataclass
class Spec:
    """An ordered collection of properties that together form a contract."""

    name: str
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


# ---------------------------------------------------------------------------
# Reference helpers
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity; the catalog
    truncates, like C, Java and Rust.
    """
    q, r = divmod(a, b)
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    return a - b * truncdiv(a, b)


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _raises(exc: type, fn: Callable, *args: Any) -> bool:
    try:
        fn(*args)
    except exc:
        return True
    return False


# ---------------------------------------------------------------------------
# Spec builders
# ---------------------------------------------------------------------------

def addition_spec() -> Spec:
    spec = Spec(name="addition")

    spec.add(Property(
        name="exact",
        description="add(a, b) == a + b",
        predicate=lambda c, a, b: int(c.add(a, b)) == int(a) + int(b),
    ))

    spec.add(Property(
        name="commutativity",
        description="add(a, b) == add(b, a)",
        predicate=lambda c, a, b: c.add(a, b) == c.add(b, a),
    ))

    spec.add(Property(
        name="identity",
        description="add(a, 0) == a",
        predicate=lambda c, a: c.add(a, 0) == a,
    ))

    spec.add(Property(
        name="associativity",
        description="add(add(a, b), c) == add(a, add(b, c))",
        predicate=lambda cat, a, b, c: (
            cat.add(cat.add(a, b), c) == cat.add(a, cat.add(b, c))
        ),
    ))

    return spec


def subtraction_spec() -> Spec:
    spec = Spec(name="subtraction")

    spec.add(Property(
        name="exact",
        description="sub(a, b) == a - b",
        predicate=lambda c, a, b: int(c.sub(a, b)) == int(a) - int(b),
    ))

    spec.add(Property(
        name="self_inverse",
        description="sub(a, a) == 0",
        predicate=lambda c, a: c.sub(a, a) == 0,
    ))

    spec.add(Property(
        name="equality_agreement",
        description="compare(a, b) == 0 iff equal(a, b) iff sub(a, b) == 0",
        predicate=lambda c, a, b: (
            (c.compare(a, b) == 0) == c.equal(a, b) == (c.sub(a, b) == 0)
        ),
    ))

    spec.add(Property(
        name="add_inverse",
        description="sub(add(a, b), b) == a",
        predicate=lambda c, a, b: c.sub(c.add(a, b), b) == a,
    ))

    return spec


def multiplication_spec() -> Spec:
    spec = Spec(name="multiplication")

    spec.add(Property(
        name="exact",
        description="mul(a, b) == a * b",
        predicate=lambda c, a, b: int(c.mul(a, b)) == int(a) * int(b),
    ))

    spec.add(Property(
        name="commutativity",
        description="mul(a, b) == mul(b, a)",
        predicate=lambda c, a, b: c.mul(a, b) == c.mul(b, a),
    ))

    spec.add(Property(
        name="identity",
        description="mul(a, 1) == a",
        predicate=lambda c, a: c.mul(a, 1) == a,
    ))

    spec.add(Property(
        name="zero",
        description="mul(a, 0) == 0",
        predicate=lambda c, a: c.mul(a, 0) == 0,
    ))

    spec.add(Property(
        name="associativity",
        description="mul(mul(a, b), c) == mul(a, mul(b, c))",
        predicate=lambda cat, a, b, c: (
            cat.mul(cat.mul(a, b), c) == cat.mul(a, cat.mul(b, c))
        ),
    ))

    return spec


def division_spec() -> Spec:
    spec = Spec(name="division")

    spec.add(Property(
        name="exact_quotient",
        description="div(a, b) truncates toward zero  (for b != 0)",
        predicate=lambda c, a, b: (
            int(b) == 0 or int(c.div(a, b)) == truncdiv(int(a), int(b))
        ),
    ))

    spec.add(Property(
        name="exact_remainder",
        description="mod(a, b) has the dividend's sign  (for b != 0)",
        predicate=lambda c, a, b: (
            int(b) == 0 or int(c.mod(a, b)) == truncmod(int(a), int(b))
        ),
    ))

    spec.add(Property(
        name="reconstruction",
        description="add(mul(div(a, b), b), mod(a, b)) == a  (for b != 0)",
        predicate=lambda c, a, b: (
            int(b) == 0 or c.add(c.mul(c.div(a, b), b), c.mod(a, b)) == a
        ),
    ))

    spec.add(Property(
        name="remainder_bound",
        description="mod(a, b) == 0 or |mod(a, b)| < |b|  (for b != 0)",
        predicate=lambda c, a, b: (
            int(b) == 0
            or c.mod(a, b) == 0
            or c.compare(c.abs(c.mod(a, b)), c.abs(b)) == -1
        ),
    ))

    spec.add(Property(
        name="division_by_zero",
        description="div(a, 0) and mod(a, 0) raise DivisionByZeroError",
        predicate=lambda c, a: (
            _raises(DivisionByZeroError, c.div, a, 0)
            and _raises(DivisionByZeroError, c.mod, a, 0)
        ),
    ))

    return spec


def power_spec() -> Spec:
    spec = Spec(name="power")

    spec.add(Property(
        name="exact",
        description="power(a, k) == a ** k  (k = |b| mod 8)",
        predicate=lambda c, a, b: (
            int(c.power(a, abs(int(b)) % 8)) == int(a) ** (abs(int(b)) % 8)
        ),
    ))

    spec.add(Property(
        name="zero_exponent",
        description="power(a, 0) == 1",
        predicate=lambda c, a: c.power(a, 0) == 1,
    ))

    spec.add(Property(
        name="negative_exponent",
        description="power(a, b) raises InvalidExponentError for b < 0",
        predicate=lambda c, a, b: (
            int(b) >= 0 or _raises(InvalidExponentError, c.power, a, b)
        ),
    ))

    return spec


def negation_spec() -> Spec:
    spec = Spec(name="negation")

    spec.add(Property(
        name="exact",
        description="negate(a) == -a",
        predicate=lambda c, a: int(c.negate(a)) == -int(a),
    ))

    spec.add(Property(
        name="double_negation",
        description="negate(negate(a)) == a",
        predicate=lambda c, a: c.negate(c.negate(a)) == a,
    ))

    spec.add(Property(
        name="abs_symmetry",
        description="abs(a) == abs(negate(a)) and abs(a) >= 0",
        predicate=lambda c, a: (
            c.abs(a) == c.abs(c.negate(a)) and int(c.abs(a)) == abs(int(a))
        ),
    ))

    return spec


def comparison_spec() -> Spec:
    spec = Spec(name="comparison")

    spec.add(Property(
        name="exact",
        description="compare(a, b) == sign(a - b)",
        predicate=lambda c, a, b: c.compare(a, b) == _sign(int(a) - int(b)),
    ))

    spec.add(Property(
        name="derived_predicates",
        description="relational predicates agree with compare",
        predicate=lambda c, a, b: (
            c.less_than(a, b) == (c.compare(a, b) < 0)
            and c.less_than_or_equal(a, b) == (c.compare(a, b) <= 0)
            and c.greater_than(a, b) == (c.compare(a, b) > 0)
            and c.greater_than_or_equal(a, b) == (c.compare(a, b) >= 0)
            and c.not_equal(a, b) == (not c.equal(a, b))
        ),
    ))

    spec.add(Property(
        name="max_min",
        description="max(a, b) and min(a, b) pick the larger and smaller",
        predicate=lambda c, a, b: (
            int(c.max(a, b)) == max(int(a), int(b))
            and int(c.min(a, b)) == min(int(a), int(b))
        ),
    ))

    return spec


def currying_spec() -> Spec:
    spec = Spec(name="currying")

    spec.add(Property(
        name="second_slot_convention",
        description="op(b)(a) == op(a, b) for sub, div, mod, compare, less_than",
        predicate=lambda c, a, b: all(
            c.get(name)(b)(a) == c.get(name)(a, b)
            for name in ("sub", "compare", "less_than", "greater_than_or_equal")
        ) and (int(b) == 0 or (c.div(b)(a) == c.div(a, b) and c.mod(b)(a) == c.mod(a, b))),
    ))

    spec.add(Property(
        name="first_slot_convention",
        description="op(a)(b) == op(a, b) for add, mul, max, min, equal",
        predicate=lambda c, a, b: all(
            c.get(name)(a)(b) == c.get(name)(a, b)
            for name in ("add", "mul", "max", "min", "equal", "not_equal")
        ),
    ))

    spec.add(Property(
        name="placeholder",
        description="sub(_, b)(a) == sub(a, b)",
        predicate=lambda c, a, b: c.sub(PLACEHOLDER, b)(a) == c.sub(a, b),
    ))

    spec.add(Property(
        name="partial_is_reusable",
        description="a binding answers the same way every time",
        predicate=lambda c, a, b: (
            isinstance(c.add(a), PartialBinding)
            and c.add(a)(b) == c.add(a)(b) == c.add(a, b)
        ),
    ))

    return spec


def all_specs() -> list[Spec]:
    return [
        addition_spec(),
        subtraction_spec(),
        multiplication_spec(),
        division_spec(),
        power_spec(),
        negation_spec(),
        comparison_spec(),
        currying_spec(),
    ]
