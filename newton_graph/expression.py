"""
Expression engine: turns user text into a function of x that can be evaluated
pointwise, sampled with numpy for plotting, and differentiated symbolically.
"""

import logging
import math
import re
from tokenize import TokenError

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .errors import EvaluationError, ParseError

logger = logging.getLogger(__name__)

X = sp.Symbol('x', real=True)

LOCALS = {
    'x': X,
    'e': sp.E,
    'pi': sp.pi,
    'abs': sp.Abs,
    'sqrt': sp.sqrt,
    'log': sp.log,
    'ln': sp.log,
    'exp': sp.exp,
    'sin': sp.sin,
    'cos': sp.cos,
    'tan': sp.tan,
    'asin': sp.asin,
    'acos': sp.acos,
    'atan': sp.atan,
    'sinh': sp.sinh,
    'cosh': sp.cosh,
    'tanh': sp.tanh,
}

TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application, convert_xor)

_PARSE_FAILURES = (sp.SympifyError, SyntaxError, TokenError, TypeError, ValueError,
                   AttributeError, NameError)
_EVAL_FAILURES = (ValueError, TypeError, ZeroDivisionError, NameError)
# Raised by lambdify/diff for functions that have no code or closed-form derivative
_COMPILE_FAILURES = (KeyError, ValueError, TypeError, NameError, AttributeError,
                     NotImplementedError)

# parse_expr evaluates the text as Python, so dunder access and keywords are refused
_UNSAFE = re.compile(r'__|\b(?:import|lambda|exec|eval|open|globals|locals|getattr)\b')


def preprocess(text):
    """Rewrite the unicode shorthands the parser does not know about."""
    eq = text.strip()
    if _UNSAFE.search(eq):
        raise ParseError(f"Invalid function expression: {eq}")
    # √(x+1) -> sqrt(x+1), √x -> sqrt(x)
    eq = re.sub(r'√\s*\(', 'sqrt(', eq)
    eq = re.sub(r'√\s*([a-zA-Z0-9_.]+)', r'sqrt(\1)', eq)
    # |x - 1| -> abs(x - 1)
    eq = re.sub(r'\|([^|]+)\|', r'abs(\1)', eq)
    if eq.count('(') != eq.count(')'):
        raise ParseError("Unbalanced parentheses in the equation. Please check your input.")
    return eq


def _to_real(value):
    if isinstance(value, complex):
        if value.imag != 0:
            raise ValueError("result is complex")
        return value.real
    return float(value)


class Expression:
    """An immutable real function of ``x``.

    Build one with :func:`parse`; derivatives are new Expression objects.
    """

    __slots__ = ('_text', '_expr', '_scalar', '_vector')

    def __init__(self, expr, text=None):
        self._expr = expr
        self._text = text if text is not None else sp.sstr(expr)
        if expr.has(sp.zoo, sp.nan):
            raise EvaluationError(f"{self._text} is undefined everywhere (division by zero).")
        if expr.has(sp.Derivative, sp.Integral):
            raise ParseError(f"{self._text} has no closed form that can be evaluated.")
        try:
            self._scalar = sp.lambdify(X, expr, 'math')
            self._vector = sp.lambdify(X, expr, 'numpy')
        except _COMPILE_FAILURES as exc:
            raise ParseError(f"{self._text} cannot be evaluated numerically.") from exc

    @property
    def text(self):
        return self._text

    @property
    def sympy(self):
        return self._expr

    def evaluate(self, x):
        """Value at ``x`` as a float.

        Raises EvaluationError on domain errors. Overflow gives ``inf`` so
        callers can treat it like any other non-finite value.
        """
        try:
            return _to_real(self._scalar(float(x)))
        except OverflowError:
            return math.inf
        except _EVAL_FAILURES as exc:
            raise EvaluationError(f"Cannot evaluate {self._text} at x = {x}: {exc}") from exc

    def sample(self, xs):
        """Vectorized evaluation for plotting; undefined points become nan."""
        xs = np.asarray(xs, dtype=float)
        try:
            with np.errstate(all='ignore'):
                ys = np.asarray(self._vector(xs))
        except (*_EVAL_FAILURES, OverflowError):
            return np.full(xs.shape, np.nan)
        if np.iscomplexobj(ys):
            ys = np.where(ys.imag == 0, ys.real, np.nan)
        return np.broadcast_to(ys, xs.shape).astype(float)

    def derivative(self, order=1):
        if order not in (1, 2):
            raise ValueError("Only first and second derivatives are supported.")
        try:
            expr = sp.diff(self._expr, X, order)
        except _COMPILE_FAILURES as exc:
            raise ParseError(f"{self._text} has no symbolic derivative.") from exc
        if expr.has(sp.Derivative):
            raise ParseError(f"{self._text} has no symbolic derivative.")
        return Expression(expr)

    def __repr__(self):
        return f"Expression({self._text!r})"

    def __str__(self):
        return self._text


def parse(text):
    """Parse ``text`` into an Expression, raising ParseError when it is not a function of x."""
    prepared = preprocess(text)
    logger.debug("Preprocessed expression: %s", prepared)
    if not prepared:
        raise ParseError("The function is empty.")
    try:
        expr = parse_expr(prepared, local_dict=dict(LOCALS), transformations=TRANSFORMATIONS)
    except _PARSE_FAILURES as exc:
        raise ParseError(f"Invalid function expression: {text}") from exc

    if not isinstance(expr, sp.Expr):
        raise ParseError(f"Not a scalar expression of x: {text}")
    unknown_functions = expr.atoms(AppliedUndef)
    if unknown_functions:
        names = ", ".join(sorted(str(f.func) for f in unknown_functions))
        raise ParseError(f"Unknown function(s): {names}")
    unknown_symbols = expr.free_symbols - {X}
    if unknown_symbols:
        names = ", ".join(sorted(str(s) for s in unknown_symbols))
        raise ParseError(f"Unknown symbol(s): {names}. Please enter a function of x.")
    return Expression(expr, text=text.strip())


def derivative(expression, variable='x'):
    """First derivative of ``expression`` with respect to ``variable``."""
    if str(variable) != 'x':
        raise ValueError("Expressions are functions of x only.")
    return expression.derivative(1)
