"""
Partial-application engine.

An ``OperationDescriptor`` declares an N-ary operation.  Calling it with
all N concrete arguments runs the body; calling it with fewer returns a
``PartialBinding`` that waits for the rest.  Calling a binding fills its
open slots and either reduces to the final result or returns a new,
narrower binding.

Slots hold one of:

  a concrete value   supplied by the caller
  PLACEHOLDER        reserved for a later argument, so that later slots
                     can be filled first ("divide *something* by 4")
  OMITTED            not supplied yet

Descriptors and bindings are immutable.  Supplying arguments to a
binding never changes it, so a binding can be reused any number of times.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from errors import ArityViolationError


class Marker(Enum):
    PLACEHOLDER = "_"
    OMITTED = "unset"

    def __repr__(self) -> str:
        return self.name


PLACEHOLDER = Marker.PLACEHOLDER
OMITTED = Marker.OMITTED
_ = PLACEHOLDER


def is_open(slot: object) -> bool:
    return isinstance(slot, Marker)


# ---------------------------------------------------------------------------
# Descriptor and binding
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OperationDescriptor:
    """A declared operation of fixed arity.

    ``binds_second_slot_when_single_argument`` makes a lone argument bind
    the second slot of a binary operation, so ``sub(2)`` means
    "subtract 2" rather than "subtract from 2".
    """

    name: str
    arity: int
    body: Callable[..., Any]
    binds_second_slot_when_single_argument: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if self.arity < 1:
            raise ValueError(f"{self.name}: arity must be >= 1, got {self.arity}")
        if self.binds_second_slot_when_single_argument and self.arity != 2:
            raise ValueError(
                f"{self.name}: second-slot binding needs arity 2, got {self.arity}"
            )

    def __call__(self, *args: Any) -> Any:
        return invoke(self, args)

    def __repr__(self) -> str:
        return f"<operation {self.name}/{self.arity}>"


@dataclass(frozen=True)
class PartialBinding:
    """An operation with some of its argument slots already filled."""

    target: OperationDescriptor
    bound_args: tuple

    def __post_init__(self) -> None:
        if len(self.bound_args) > self.target.arity:
            raise ArityViolationError(
                self.target.name, self.target.arity, len(self.bound_args)
            )

    @property
    def arity(self) -> int:
        return self.target.arity

    @property
    def open_slots(self) -> int:
        return sum(1 for slot in self.bound_args if is_open(slot))

    @property
    def is_complete(self) -> bool:
        return self.open_slots == 0

    def __call__(self, *args: Any) -> Any:
        return supply(self, args)

    def __repr__(self) -> str:
        slots = ", ".join(repr(s) if is_open(s) else str(s) for s in self.bound_args)
        return f"{self.target.name}({slots})"


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

def _without_trailing_omitted(args) -> list:
    args = list(args)
    while args and args[-1] is OMITTED:
        args.pop()
    return args


def reduce_if_complete(binding: PartialBinding) -> Any:
    """Run the body once every slot is concrete, else hand back the binding."""
    if not binding.is_complete:
        return binding
    return binding.target.body(*binding.bound_args)


def bind(descriptor: OperationDescriptor, args) -> PartialBinding:
    """Lay ``args`` out in the slots of ``descriptor`` without running it."""
    args = _without_trailing_omitted(args)
    if len(args) > descriptor.arity:
        raise ArityViolationError(descriptor.name, descriptor.arity, len(args))
    if descriptor.binds_second_slot_when_single_argument and len(args) == 1:
        args = [OMITTED, args[0]]
    slots = tuple(args) + (OMITTED,) * (descriptor.arity - len(args))
    return PartialBinding(descriptor, slots)


def fill(binding: PartialBinding, more_args) -> PartialBinding:
    """Fill the open slots of ``binding`` left to right without running it.

    Supplied ``OMITTED`` values are skipped; a supplied ``PLACEHOLDER``
    fills a slot but keeps it open for a later call.
    """
    incoming = [arg for arg in more_args if arg is not OMITTED]
    open_count = binding.open_slots
    if len(incoming) > open_count:
        raise ArityViolationError(
            binding.target.name, binding.arity, len(incoming), open_slots=open_count
        )

    slots = list(binding.bound_args)
    position = 0
    for arg in incoming:
        while not is_open(slots[position]):
            position += 1
        slots[position] = arg
        position += 1
    return PartialBinding(binding.target, tuple(slots))


def invoke(descriptor: OperationDescriptor, args) -> Any:
    """Call ``descriptor`` with zero or more arguments."""
    return reduce_if_complete(bind(descriptor, args))


def supply(binding: PartialBinding, more_args) -> Any:
    """Feed more arguments to ``binding``; see ``fill``."""
    return reduce_if_complete(fill(binding, more_args))
