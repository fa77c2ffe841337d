import matplotlib.pyplot as plt
import numpy as np
import pytest

from newton_graph import plotting
from newton_graph.expression import parse
from newton_graph.plotting import (
    Curve,
    HorizontalLine,
    Marker,
    MatplotlibSurface,
    Polyline,
    Viewport,
    build_plot,
    render,
    retraction_ids,
)
from newton_graph.solver import IterationPoint, RootResult, TerminationReason, newton_raphson


@pytest.fixture
def run():
    f = parse("x^2 - 2")
    return f, newton_raphson(f, 1.0, 1e-10)


@pytest.fixture
def axes():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


class RecordingSurface:
    def __init__(self):
        self.calls = []
        self.items = {}

    def upsert(self, pid, primitive):
        self.calls.append(("upsert", pid))
        self.items[pid] = primitive

    def remove(self, pid):
        self.calls.append(("remove", pid))
        self.items.pop(pid, None)

    def set_viewport(self, viewport):
        self.calls.append(("viewport", viewport))


def test_primitive_ids_and_order(run):
    f, result = run
    plot = build_plot(result, "x^2 - 2", f)
    n = len(result.trace)
    expected = ["func", "axis", "root"] + [f"iterP{i}" for i in range(n)] + ["iterLine"]
    assert plot.ids() == expected


def test_primitive_contents(run):
    f, result = run
    plot = build_plot(result, "x^2 - 2", f)
    curve = plot.get("func")
    assert isinstance(curve, Curve)
    assert curve.label == "y = x^2 - 2"
    assert curve.expression is f
    assert isinstance(plot.get("axis"), HorizontalLine)
    assert plot.get("axis").y == 0.0
    root = plot.get("root")
    assert isinstance(root, Marker)
    assert (root.x, root.y) == (result.root, 0.0)
    for i, point in enumerate(result.trace):
        marker = plot.get(f"iterP{i}")
        assert (marker.x, marker.y) == (point.x, point.fx)
    line = plot.get("iterLine")
    assert isinstance(line, Polyline)
    assert line.points == tuple((p.x, p.fx) for p in result.trace)


def test_viewport_is_centred_on_root(run):
    f, result = run
    viewport = build_plot(result, "x^2 - 2", f).viewport
    assert viewport == Viewport(result.root - 6, result.root + 6, -6.0, 6.0)


def test_retraction_covers_original_marker_capacity():
    ids = retraction_ids()
    assert ids[:4] == ["func", "axis", "root", "iterLine"]
    assert "iterP0" in ids and "iterP199" in ids
    assert len(ids) == 204
    assert "iterP250" in retraction_ids(marker_count=251)


def test_render_retracts_before_drawing(run):
    f, result = run
    surface = RecordingSurface()
    plot = build_plot(result, "x^2 - 2", f)
    render(surface, plot)
    kinds = [c[0] for c in surface.calls]
    first_upsert = kinds.index("upsert")
    assert set(kinds[:first_upsert]) == {"remove"}
    assert "remove" not in kinds[first_upsert:]
    assert surface.calls[-1] == ("viewport", plot.viewport)
    assert list(surface.items) == plot.ids()


def test_matplotlib_remove_is_idempotent(axes):
    surface = MatplotlibSurface(axes)
    surface.remove("iterP3")
    surface.remove("iterP3")
    surface.upsert("root", Marker(1.0, 0.0))
    surface.remove("root")
    surface.remove("root")
    assert "root" not in surface
    assert len(axes.collections) == 0


def test_matplotlib_redraw_leaves_no_stale_artists(run, axes):
    f, result = run
    surface = MatplotlibSurface(axes, samples=200)
    plot = build_plot(result, "x^2 - 2", f)
    render(surface, plot)
    render(surface, plot)
    assert sorted(surface.ids()) == sorted(plot.ids())
    # curve, axis and polyline are lines; root and iterates are scatter collections
    assert len(axes.lines) == 3
    assert len(axes.collections) == 1 + len(result.trace)
    assert axes.get_xlim() == pytest.approx((result.root - 6, result.root + 6))
    assert axes.get_ylim() == pytest.approx((-6, 6))


def test_matplotlib_curve_follows_viewport(axes):
    f = parse("x^2")
    surface = MatplotlibSurface(axes, samples=50)
    surface.upsert("func", Curve(label="y = x^2", expression=f))
    surface.set_viewport(Viewport(10.0, 20.0, -6.0, 6.0))
    (line,) = [l for l in axes.lines if l.get_label() == "y = x^2"]
    xs = line.get_xdata()
    assert xs[0] == pytest.approx(10.0)
    assert xs[-1] == pytest.approx(20.0)
    assert np.allclose(line.get_ydata(), np.asarray(xs) ** 2)


def test_clear_removes_everything(run, axes):
    f, result = run
    surface = MatplotlibSurface(axes)
    render(surface, build_plot(result, "x^2 - 2", f))
    plotting.clear(surface)
    assert surface.ids() == []
    assert len(axes.lines) == 0
    assert len(axes.collections) == 0


def test_unknown_primitive_is_rejected(axes):
    with pytest.raises(TypeError):
        MatplotlibSurface(axes).upsert("odd", object())


def _long_run(count=301):
    trace = tuple(IterationPoint(x=1.0 + i * 1e-3, fx=0.5) for i in range(count))
    return RootResult(root=trace[-1].x, f_at_root=0.5, iterations=count - 1, trace=trace,
                      termination_reason=TerminationReason.MAX_ITERATIONS_REACHED)


def test_render_retracts_markers_of_a_longer_previous_run(run):
    f, result = run
    long_plot = build_plot(_long_run(), "x^2 - 2", f)
    short_plot = build_plot(result, "x^2 - 2", f)
    surface = RecordingSurface()
    render(surface, long_plot)
    render(surface, short_plot, previous_marker_count=301)
    assert "iterP200" not in surface.items
    assert "iterP300" not in surface.items
    assert list(surface.items) == short_plot.ids()


@pytest.mark.parametrize("previous_marker_count", [301, 0])
def test_matplotlib_redraw_after_longer_run_leaves_no_stale_markers(run, axes, previous_marker_count):
    f, result = run
    surface = MatplotlibSurface(axes, samples=50)
    render(surface, build_plot(_long_run(), "x^2 - 2", f))
    assert "iterP300" in surface
    short_plot = build_plot(result, "x^2 - 2", f)
    render(surface, short_plot, previous_marker_count=previous_marker_count)
    assert sorted(surface.ids()) == sorted(short_plot.ids())
    assert len(axes.collections) == 1 + len(result.trace)
