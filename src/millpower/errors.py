"""Exceptions raised for failed calculations.

All of these are deterministic input problems, so they derive from
ValueError and are never retried.
"""

from .enums import ErrorKind


class CalculationError(ValueError):
    """Base class for calculation failures."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT


class InvalidInputError(CalculationError):
    """A parameter is not a number or is outside its valid range."""

    kind = ErrorKind.INVALID_INPUT


class InvalidGeometryError(CalculationError):
    """Radial engagement exceeds the tool diameter."""

    kind = ErrorKind.INVALID_GEOMETRY


class NonFiniteResultError(CalculationError):
    """Motor power came out as NaN or infinity."""

    kind = ErrorKind.NON_FINITE_RESULT


ERRORS_BY_KIND = {
    ErrorKind.INVALID_INPUT: InvalidInputError,
    ErrorKind.INVALID_GEOMETRY: InvalidGeometryError,
    ErrorKind.NON_FINITE_RESULT: NonFiniteResultError,
}
