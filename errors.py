"""
Error taxonomy for the numeric core.

Every error is raised at the offending call and never coerced into a
result.  Each class also derives from the builtin exception a caller
would naturally catch for the same failure.

    NumericError
    ├── InvalidOperandError    malformed operand or sign/magnitude mismatch
    ├── DivisionByZeroError    div/mod with a zero divisor
    ├── InvalidExponentError   power with a negative or non-integer exponent
    └── ArityViolationError    more arguments than an operation accepts
"""

from __future__ import annotations


class NumericError(Exception):
    """Base class for every error raised by the numeric core."""


class InvalidOperandError(NumericError, ValueError):
    """Raised when a value cannot be used as an operand."""

    def __init__(self, value: object, reason: str = "not an integer operand") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid operand {value!r}: {reason}")


class DivisionByZeroError(NumericError, ZeroDivisionError):
    """Raised by div and mod when the divisor is zero."""

    def __init__(self, operation: str = "div") -> None:
        self.operation = operation
        super().__init__(f"{operation}: division by zero")


class InvalidExponentError(NumericError, ValueError):
    """Raised by power when the exponent is negative or not an integer."""

    def __init__(self, exponent: object) -> None:
        self.exponent = exponent
        super().__init__(
            f"Exponent must be a non-negative integer, got {exponent!r}"
        )


class ArityViolationError(NumericError, TypeError):
    """Raised when more arguments are supplied than an operation has slots."""

    def __init__(
        self,
        operation: str,
        arity: int,
        supplied: int,
        open_slots: int | None = None,
    ) -> None:
        self.operation = operation
        self.arity = arity
        self.supplied = supplied
        self.open_slots = open_slots
        if open_slots is None:
            message = f"{operation} takes {arity} argument(s) but {supplied} were supplied"
        else:
            message = (
                f"{operation} binding has {open_slots} open slot(s) "
                f"but {supplied} argument(s) were supplied"
            )
        super().__init__(message)
