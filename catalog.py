"""
The operation catalog.

Each entry is an ``OperationDescriptor`` that binds one engine algorithm
into the partial-application protocol.  Non-commutative binary
operations bind a lone argument to their *second* slot:

    sub(2)(10)   ->  8        (subtract 2 from 10)
    div(4)(100)  ->  25
    less_than(5) ->  "is less than 5"

The module-level names (``add``, ``sub``, ...) are the entries of
``DEFAULT_CATALOG``, built on an ``ArithmeticEngine`` with INT64 native
bounds.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from arithmetic import ArithmeticEngine
from partial import OperationDescriptor


@dataclass(frozen=True, eq=False)
class Catalog:
    """Named operations over one engine, in declaration order."""

    engine: ArithmeticEngine
    operations: dict[str, OperationDescriptor] = field(default_factory=dict)

    def get(self, name: str) -> OperationDescriptor:
        return self.operations[name]

    def names(self) -> list[str]:
        return list(self.operations)

    def __getattr__(self, name: str) -> OperationDescriptor:
        operations = self.__dict__.get("operations", {})
        if name in operations:
            return operations[name]
        raise AttributeError(name)

    def __contains__(self, name: str) -> bool:
        return name in self.operations

    def __iter__(self):
        return iter(self.operations.values())

    def __len__(self):
        return len(self.operations)


# (name, arity, engine method, binds second slot, description)
_ENTRIES = [
    ("add", 2, "add", False, "Sum of two integers"),
    ("sub", 2, "sub", True, "First integer minus the second"),
    ("mul", 2, "mul", False, "Product of two integers"),
    ("div", 2, "div", True, "Quotient truncated toward zero"),
    ("mod", 2, "mod", True, "Remainder with the dividend's sign"),
    ("negate", 1, "negate", False, "Integer with its sign flipped"),
    ("abs", 1, "absolute", False, "Absolute value"),
    ("max", 2, "maximum", False, "Larger of two integers"),
    ("min", 2, "minimum", False, "Smaller of two integers"),
    ("power", 2, "power", True, "Base raised to a non-negative exponent"),
    ("compare", 2, "compare", True, "-1, 0 or 1 as the first is below, equal to or above the second"),
    ("equal", 2, "equal", False, "True if the integers are equal"),
    ("not_equal", 2, "not_equal", False, "True if the integers differ"),
    ("less_than", 2, "less_than", True, "True if the first is below the second"),
    ("less_than_or_equal", 2, "less_than_or_equal", True, "True if the first is at most the second"),
    ("greater_than", 2, "greater_than", True, "True if the first is above the second"),
    ("greater_than_or_equal", 2, "greater_than_or_equal", True, "True if the first is at least the second"),
]


def build_catalog(engine: ArithmeticEngine | None = None) -> Catalog:
    """Declare every catalog operation over ``engine``."""
    if engine is None:
        engine = ArithmeticEngine()
    operations = {
        name: OperationDescriptor(
            name=name,
            arity=arity,
            body=getattr(engine, method),
            binds_second_slot_when_single_argument=second,
            description=description,
        )
        for name, arity, method, second, description in _ENTRIES
    }
    return Catalog(engine=engine, operations=operations)


DEFAULT_CATALOG = build_catalog()

add = DEFAULT_CATALOG.get("add")
sub = DEFAULT_CATALOG.get("sub")
mul = DEFAULT_CATALOG.get("mul")
div = DEFAULT_CATALOG.get("div")
mod = DEFAULT_CATALOG.get("mod")
negate = DEFAULT_CATALOG.get("negate")
abs_ = DEFAULT_CATALOG.get("abs")
max_ = DEFAULT_CATALOG.get("max")
min_ = DEFAULT_CATALOG.get("min")
power = DEFAULT_CATALOG.get("power")
compare = DEFAULT_CATALOG.get("compare")
equal = DEFAULT_CATALOG.get("equal")
not_equal = DEFAULT_CATALOG.get("not_equal")
less_than = DEFAULT_CATALOG.get("less_than")
less_than_or_equal = DEFAULT_CATALOG.get("less_than_or_equal")
greater_than = DEFAULT_CATALOG.get("greater_than")
greater_than_or_equal = DEFAULT_CATALOG.get("greater_than_or_equal")
