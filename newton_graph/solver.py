"""
Newton-Raphson root finder.

``newton_raphson`` runs the bounded iteration on a parsed expression and
raises on failure. ``solve`` runs a whole request from the raw form values and
returns an :class:`Outcome` that holds either a RootResult or a Failure.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .config import DEFAULT_SETTINGS
from .convergence import ConvergenceReport, check_convergence
from .errors import (
    EmptyFunctionError,
    ErrorKind,
    InvalidNumericInputError,
    NearZeroDerivativeError,
    NewtonError,
    NonFiniteError,
)
from .expression import parse
from .normalizer import normalize_equation

logger = logging.getLogger(__name__)


class TerminationReason(Enum):
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"


@dataclass(frozen=True)
class IterationPoint:
    x: float
    fx: float


@dataclass(frozen=True)
class RootResult:
    root: float
    f_at_root: float
    iterations: int
    trace: Tuple[IterationPoint, ...]
    termination_reason: TerminationReason

    @property
    def converged(self):
        return self.termination_reason is TerminationReason.CONVERGED


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    trace: Tuple[IterationPoint, ...] = ()

    @classmethod
    def from_error(cls, err):
        return cls(kind=err.kind, message=err.message, trace=err.trace)


@dataclass(frozen=True)
class Outcome:
    """Everything one request produced. Exactly one of result/failure is set."""

    normalized: Optional[str] = None
    convergence: Optional[ConvergenceReport] = None
    result: Optional[RootResult] = None
    failure: Optional[Failure] = None
    x0: Optional[float] = None
    epsilon: Optional[float] = None
    expression: object = field(default=None, repr=False, compare=False)

    @property
    def ok(self):
        return self.result is not None


def _build_trace(xs, fxs):
    return tuple(IterationPoint(x=x, fx=fx) for x, fx in zip(xs, fxs))


def newton_raphson(f, x0, epsilon, fprime=None, settings=DEFAULT_SETTINGS):
    """
    Iterate x_{n+1} = x_n - f(x_n)/f'(x_n) from ``x0`` until two successive
    estimates differ by less than ``epsilon``.

    Stops after ``settings.max_iter`` steps and returns the last estimate with
    MAX_ITERATIONS_REACHED. Raises NonFiniteError, NearZeroDerivativeError or
    EvaluationError; the exception's ``trace`` holds the steps taken so far.
    """
    if not epsilon > 0:
        raise InvalidNumericInputError("Tolerance must be a positive number.")
    if fprime is None:
        fprime = f.derivative(1)

    xn = float(x0)
    xs = [xn]
    fxs = []
    n = 0
    while n < settings.max_iter:
        try:
            fx = f.evaluate(xn)
            fpx = fprime.evaluate(xn)
        except NewtonError as err:
            raise type(err)(err.message, trace=_build_trace(xs, fxs + [math.nan])) from err
        fxs.append(fx)

        if not (math.isfinite(fx) and math.isfinite(fpx)):
            raise NonFiniteError("Infinity/NaN in the function or its derivative.",
                                 trace=_build_trace(xs, fxs))
        if abs(fpx) < settings.derivative_floor:
            raise NearZeroDerivativeError("The derivative is too close to zero.",
                                          trace=_build_trace(xs, fxs))

        xn1 = xn - fx / fpx
        xs.append(xn1)
        n += 1
        logger.debug("step %d: x=%.17g f=%.6e f'=%.6e -> %.17g", n, xn, fx, fpx, xn1)
        if abs(xn1 - xn) < epsilon:
            reason = TerminationReason.CONVERGED
            break
        xn = xn1
    else:
        reason = TerminationReason.MAX_ITERATIONS_REACHED

    root = xs[-1]
    try:
        f_at_root = f.evaluate(root)
    except NewtonError as err:
        raise type(err)(err.message, trace=_build_trace(xs, fxs + [math.nan])) from err
    fxs.append(f_at_root)
    return RootResult(
        root=root,
        f_at_root=f_at_root,
        iterations=n,
        trace=_build_trace(xs, fxs),
        termination_reason=reason,
    )


def parse_number(value, name):
    """Accept a number or the text of one; reject nan and infinities."""
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidNumericInputError(f"{name} must be a number.") from None
    if not math.isfinite(number):
        raise InvalidNumericInputError(f"{name} must be a finite number.")
    return number


def validate_inputs(function_text, x0, epsilon):
    """Check the three form fields before anything is parsed."""
    if function_text is None or not str(function_text).strip():
        raise EmptyFunctionError("Enter a function.")
    x0 = parse_number(x0, "x0")
    epsilon = parse_number(epsilon, "Tolerance")
    if epsilon <= 0:
        raise InvalidNumericInputError("Tolerance must be a positive number.")
    return str(function_text).strip(), x0, epsilon


def solve(function_text, x0, epsilon, settings=DEFAULT_SETTINGS):
    """Run one request end to end without raising NewtonError."""
    try:
        function_text, x0, epsilon = validate_inputs(function_text, x0, epsilon)
        normalized = normalize_equation(function_text)
    except NewtonError as err:
        return Outcome(failure=Failure.from_error(err))

    try:
        f = parse(normalized)
        fprime = f.derivative(1)
    except NewtonError as err:
        return Outcome(normalized=normalized, failure=Failure.from_error(err),
                       x0=x0, epsilon=epsilon)

    convergence = check_convergence(f, x0, fprime=fprime)
    try:
        result = newton_raphson(f, x0, epsilon, fprime=fprime, settings=settings)
    except NewtonError as err:
        logger.info("Newton iteration failed for %s: %s", normalized, err)
        return Outcome(normalized=normalized, convergence=convergence,
                       failure=Failure.from_error(err), x0=x0, epsilon=epsilon,
                       expression=f)

    logger.info("%s: root %.10f after %d iterations (%s)", normalized, result.root,
                result.iterations, result.termination_reason.value)
    return Outcome(normalized=normalized, convergence=convergence, result=result,
                   x0=x0, epsilon=epsilon, expression=f)
