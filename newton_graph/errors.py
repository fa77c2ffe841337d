"""Exception classes for the Newton root finder."""

from enum import Enum


class ErrorKind(Enum):
    EMPTY_FUNCTION = "empty_function"
    INVALID_NUMERIC_INPUT = "invalid_numeric_input"
    MULTIPLE_EQUALS = "multiple_equals"
    PARSE = "parse"
    EVALUATION = "evaluation"
    NON_FINITE = "non_finite"
    NEAR_ZERO_DERIVATIVE = "near_zero_derivative"


class NewtonError(ValueError):
    """Base exception for every failure a root-finding request can report.

    ``trace`` holds the iteration points computed before the failure, so a
    caller can still show how far the iteration got.
    """

    kind = None

    def __init__(self, message, trace=()):
        super().__init__(message)
        self.message = message
        self.trace = tuple(trace)


class EmptyFunctionError(NewtonError):
    kind = ErrorKind.EMPTY_FUNCTION


class InvalidNumericInputError(NewtonError):
    """Raised when x0 or epsilon is not a usable number."""

    kind = ErrorKind.INVALID_NUMERIC_INPUT


class MultipleEqualsError(NewtonError):
    kind = ErrorKind.MULTIPLE_EQUALS


class ParseError(NewtonError):
    """Raised when the function text is not a valid expression of x."""

    kind = ErrorKind.PARSE


class EvaluationError(NewtonError):
    """Raised on domain errors while evaluating (log of a negative, 1/0, ...)."""

    kind = ErrorKind.EVALUATION


class NonFiniteError(NewtonError):
    kind = ErrorKind.NON_FINITE


class NearZeroDerivativeError(NewtonError):
    kind = ErrorKind.NEAR_ZERO_DERIVATIVE
