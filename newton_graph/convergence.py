import logging
import math
from dataclasses import dataclass

from .errors import NewtonError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvergenceReport:
    """Sufficient condition |f(x0)*f''(x0)| < f'(x0)^2 and the values behind it."""

    holds: bool
    fx0: float
    fpx0: float
    fppx0: float


def convergence_condition(fx, fpx, fppx):
    # nan compares false, so non-finite values never satisfy the condition
    return abs(fx * fppx) < fpx ** 2


def check_convergence(f, x0, fprime=None, fsecond=None):
    """
    Evaluate the Newton convergence condition at ``x0``.

    Advisory only: any failure is logged and gives None instead of raising.
    Derivatives are computed from ``f`` unless they are passed in.
    """
    try:
        if fprime is None:
            fprime = f.derivative(1)
        if fsecond is None:
            fsecond = fprime.derivative(1)
        fx = f.evaluate(x0)
        fpx = fprime.evaluate(x0)
        fppx = fsecond.evaluate(x0)
    except NewtonError as exc:
        logger.debug("Convergence check skipped at x0=%s: %s", x0, exc)
        return None

    try:
        holds = convergence_condition(fx, fpx, fppx)
    except OverflowError:
        holds = False
    if not all(map(math.isfinite, (fx, fpx, fppx))):
        holds = False
    return ConvergenceReport(holds=holds, fx0=fx, fpx0=fpx, fppx0=fppx)
