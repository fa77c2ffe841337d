import math

import pytest

from newton_graph.convergence import check_convergence, convergence_condition
from newton_graph.expression import parse


def test_condition_holds_for_x_squared_minus_two_at_two():
    report = check_convergence(parse("x^2 - 2"), 2.0)
    assert report.fx0 == pytest.approx(2.0)
    assert report.fpx0 == pytest.approx(4.0)
    assert report.fppx0 == pytest.approx(2.0)
    assert report.holds is True


def test_condition_fails_where_derivative_vanishes():
    report = check_convergence(parse("x^2 - 2"), 0.0)
    assert report.holds is False
    assert report.fpx0 == 0.0


def test_boundary_is_strict():
    # x^2 + 4 at 2: |8 * 2| == 4^2
    report = check_convergence(parse("x^2 + 4"), 2.0)
    assert report.holds is False


def test_evaluation_failure_gives_no_report():
    assert check_convergence(parse("log(x)"), -1.0) is None


def test_non_finite_values_never_hold():
    assert convergence_condition(math.nan, 1.0, 1.0) is False
    report = check_convergence(parse("exp(x)"), 1000.0)
    assert report is not None
    assert report.holds is False


def test_precomputed_derivatives_are_used():
    f = parse("x^3")
    fprime = f.derivative(1)
    report = check_convergence(f, 1.0, fprime=fprime, fsecond=f.derivative(2))
    assert (report.fx0, report.fpx0, report.fppx0) == (1.0, 3.0, 6.0)
    assert report.holds is True
