from newton_graph.convergence import ConvergenceReport
from newton_graph.report import (
    convergence_lines,
    iteration_rows,
    outcome_lines,
    result_lines,
)
from newton_graph.solver import solve


def test_no_advisory_without_report():
    assert convergence_lines(None, 1.0) == []


def test_advisory_when_condition_holds():
    lines = convergence_lines(ConvergenceReport(True, 2.0, 4.0, 2.0), 2.0)
    assert lines[0] == "Convergence condition holds:"
    assert lines[-1] == "f(x0) = 2.000e+00, f'(x0) = 4.000e+00, f''(x0) = 2.000e+00"


def test_advisory_when_condition_fails():
    lines = convergence_lines(ConvergenceReport(False, -2.0, 0.0, 2.0), 0.0)
    assert lines[0] == "Convergence condition does not hold at x0 = 0."
    assert "may not converge" in lines[1]


def test_result_lines():
    outcome = solve("x^2 - 2", "1", "1e-10")
    lines = result_lines(outcome.normalized, outcome.x0, outcome.result)
    assert lines[0] == "f(x): x^2 - 2"
    assert lines[1] == "x0: 1"
    assert lines[2] == "Root found: x ≈ 1.4142135624"
    assert lines[4] == f"Iterations: {outcome.result.iterations}"


def test_iteration_limit_is_mentioned():
    outcome = solve("x^2 + 1", "0.5", "1e-10")
    assert "iteration limit" in outcome_lines(outcome)[-1]


def test_failure_line():
    outcome = solve("x = 1 = 2", "1", "1e-6")
    assert outcome_lines(outcome) == ['Error: Use only one "=" in the equation.']


def test_iteration_rows():
    outcome = solve("x^2 - 2", "1", "1e-10")
    rows = iteration_rows(outcome.result.trace)
    assert len(rows) == outcome.result.iterations + 1
    assert rows[0] == (0, "1.0000000000", "-1.000000e+00", "")
    assert rows[1][0] == 1
    assert rows[1][3] == "5.00e-01"
