"""Wire models for the evaluation service.

Operands travel as JSON integers or as signed decimal strings; strings
are the safe choice for anything beyond 53 bits.  Two slot markers are
reserved:

  "_"    PLACEHOLDER - keep this slot open for a later argument
  null   OMITTED     - nothing supplied yet

Results are encoded the same way: integer results as decimal strings,
comparisons as -1/0/1 and predicates as booleans.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr, field_validator

from arithmetic import Ordering
from errors import InvalidOperandError
from operand import Extended, Native, Operand, Sign, to_operand
from partial import OMITTED, PLACEHOLDER, PartialBinding

MAX_LITERAL_LENGTH = 10_000

SlotValue = Union[StrictInt, StrictStr, None]


# ---------------------------------------------------------------------------
# Slot encoding
# ---------------------------------------------------------------------------

def decode_slot(value: SlotValue) -> Any:
    if value is None:
        return OMITTED
    if value == PLACEHOLDER.value:
        return PLACEHOLDER
    return to_operand(value)


def encode_slot(slot: Any) -> SlotValue:
    if slot is OMITTED:
        return None
    if slot is PLACEHOLDER:
        return PLACEHOLDER.value
    return str(slot)


def encode_value(value: Any) -> Union[StrictBool, StrictInt, StrictStr]:
    if isinstance(value, bool):
        return value
    if isinstance(value, Ordering):
        return int(value)
    if isinstance(value, (Native, Extended)):
        return str(value)
    raise TypeError(f"Cannot encode result {value!r}")


def _check_slots(values: list[SlotValue]) -> list[SlotValue]:
    for v in values:
        if isinstance(v, str) and v != PLACEHOLDER.value:
            if len(v) > MAX_LITERAL_LENGTH:
                raise ValueError(
                    f"Literal longer than {MAX_LITERAL_LENGTH} characters"
                )
            try:
                to_operand(v)
            except InvalidOperandError as e:
                raise ValueError(str(e)) from e
    return values


# ---------------------------------------------------------------------------
# Work limits
# ---------------------------------------------------------------------------

# Schoolbook multiplication and long division cost about len(a) * len(b)
# digit steps; power is bounded by the size of its result.
MAX_DIGIT_PRODUCTS = 2_000_000
MAX_POWER_DIGITS = 4_000

_QUADRATIC_OPERATIONS = ("mul", "div", "mod")


class WorkLimitError(ValueError):
    """Raised when one evaluation would cost more than a request may spend."""


def estimated_power_digits(base: Operand, exponent: int) -> float:
    """Upper estimate of the digit count of ``base ** exponent``."""
    lead = base.digits[:15]
    log10 = math.log10(int("".join(str(d) for d in lead)))
    return exponent * (log10 + base.digit_count - len(lead)) + 1


def check_work(binding: PartialBinding) -> None:
    """Refuse a complete binding whose evaluation would be too expensive."""
    if not binding.is_complete:
        return
    name = binding.target.name
    if name in _QUADRATIC_OPERATIONS:
        a, b = binding.bound_args
        cost = a.digit_count * b.digit_count
        if cost > MAX_DIGIT_PRODUCTS:
            raise WorkLimitError(
                f"{name}: {cost} digit products exceeds the limit of {MAX_DIGIT_PRODUCTS}"
            )
    elif name == "power":
        base, exponent = binding.bound_args
        # Negative exponents are rejected by the engine; 0 and +-1 need no loop.
        if exponent.sign is Sign.NEGATIVE or base.digits in ((0,), (1,)):
            return
        if (
            exponent.digit_count > len(str(MAX_POWER_DIGITS)) + 1
            or estimated_power_digits(base, int(exponent)) > MAX_POWER_DIGITS
        ):
            raise WorkLimitError(
                f"power: result would exceed {MAX_POWER_DIGITS} digits"
            )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class InvokeRequest(BaseModel):
    """Arguments for a fresh call of a catalog operation."""

    args: list[SlotValue] = Field(default_factory=list, max_length=16)

    @field_validator("args")
    @classmethod
    def args_are_slots(cls, v: list[SlotValue]) -> list[SlotValue]:
        return _check_slots(v)


class Binding(BaseModel):
    """A partial binding as carried over the wire."""

    operation: str = Field(..., min_length=1, max_length=64)
    slots: list[SlotValue] = Field(default_factory=list, max_length=16)

    @field_validator("slots")
    @classmethod
    def slots_are_slots(cls, v: list[SlotValue]) -> list[SlotValue]:
        return _check_slots(v)

    @classmethod
    def from_partial(cls, binding: PartialBinding) -> Binding:
        return cls(
            operation=binding.target.name,
            slots=[encode_slot(s) for s in binding.bound_args],
        )


class SupplyRequest(BaseModel):
    """Further arguments for a binding returned by an earlier call."""

    binding: Binding
    args: list[SlotValue] = Field(default_factory=list, max_length=16)

    @field_validator("args")
    @classmethod
    def args_are_slots(cls, v: list[SlotValue]) -> list[SlotValue]:
        return _check_slots(v)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ResultKind(str, Enum):
    VALUE = "value"
    PARTIAL = "partial"


class OperationInfo(BaseModel):
    name: str
    arity: int
    binds_second_slot_when_single_argument: bool
    description: str = ""


class EvaluationResponse(BaseModel):
    """Either a final value or a binding awaiting more arguments."""

    kind: ResultKind
    value: Union[StrictBool, StrictInt, StrictStr, None] = None
    binding: Binding | None = None

    @classmethod
    def from_result(cls, result: Any) -> EvaluationResponse:
        if isinstance(result, PartialBinding):
            return cls(kind=ResultKind.PARTIAL, binding=Binding.from_partial(result))
        return cls(kind=ResultKind.VALUE, value=encode_value(result))
