import re

from .errors import EmptyFunctionError, MultipleEqualsError

_PREFIX = re.compile(r'^\s*(?:y|f\s*\(\s*x\s*\))\s*=\s*', re.IGNORECASE)


def strip_prefix(eq):
    """Remove a leading ``y =`` or ``f(x) =``."""
    return _PREFIX.sub('', eq, count=1)


def normalize_equation(eq):
    """
    Rewrite user input as a single expression that is zero at the root.

    ``y = x^2`` and ``f(x) = x^2`` become ``x^2``; ``x^2 = 4`` becomes
    ``(x^2) - (4)``. More than one '=' is rejected.
    """
    eq = strip_prefix(eq.strip()).strip()
    if not eq:
        raise EmptyFunctionError("Enter a function.")

    if eq.count('=') > 1:
        raise MultipleEqualsError('Use only one "=" in the equation.')
    if '=' in eq:
        left, right = (part.strip() for part in eq.split('=', 1))
        if not left or not right:
            raise EmptyFunctionError("Both sides of the equation must be filled in.")
        eq = f"({left}) - ({right})"
    return eq
