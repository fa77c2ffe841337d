"""Newton-Raphson root finding with an iteration plot."""

from .convergence import ConvergenceReport, check_convergence
from .errors import (
    EmptyFunctionError,
    ErrorKind,
    EvaluationError,
    InvalidNumericInputError,
    MultipleEqualsError,
    NearZeroDerivativeError,
    NewtonError,
    NonFiniteError,
    ParseError,
)
from .expression import Expression, derivative, parse
from .normalizer import normalize_equation
from .solver import (
    Failure,
    IterationPoint,
    Outcome,
    RootResult,
    TerminationReason,
    newton_raphson,
    solve,
)

__version__ = "0.1.0"
