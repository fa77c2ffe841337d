"""Plain-text lines for the result panel and rows for the iteration table."""

from .solver import TerminationReason

CONDITION = "|f(x0)*f''(x0)| < [f'(x0)]^2"


def _values_line(report):
    return f"f(x0) = {report.fx0:.3e}, f'(x0) = {report.fpx0:.3e}, f''(x0) = {report.fppx0:.3e}"


def convergence_lines(report, x0):
    """Advisory text; nothing when the check could not be evaluated."""
    if report is None:
        return []
    if report.holds:
        return ["Convergence condition holds:", CONDITION, _values_line(report)]
    return [
        f"Convergence condition does not hold at x0 = {x0:g}.",
        "Newton's method may not converge.",
        _values_line(report),
    ]


def result_lines(normalized, x0, result):
    lines = [
        f"f(x): {normalized}",
        f"x0: {x0:g}",
        f"Root found: x ≈ {result.root:.10f}",
        f"f(x) at root: {result.f_at_root:.3e}",
        f"Iterations: {result.iterations}",
    ]
    if result.termination_reason is TerminationReason.MAX_ITERATIONS_REACHED:
        lines.append("Stopped at the iteration limit before reaching the tolerance.")
    return lines


def outcome_lines(outcome):
    lines = convergence_lines(outcome.convergence, outcome.x0)
    if outcome.ok:
        lines += result_lines(outcome.normalized, outcome.x0, outcome.result)
    else:
        lines.append(f"Error: {outcome.failure.message}")
    return lines


def iteration_rows(trace):
    """(n, x_n, f(x_n), |x_n - x_(n-1)|) formatted for the table."""
    rows = []
    previous = None
    for n, point in enumerate(trace):
        step = "" if previous is None else f"{abs(point.x - previous):.2e}"
        rows.append((n, f"{point.x:.10f}", f"{point.fx:.6e}", step))
        previous = point.x
    return rows
