"""
Plot adapter.

A finished run is turned into drawable primitives keyed by stable ids. Any
object with ``upsert(id, primitive)``, ``remove(id)`` and
``set_viewport(viewport)`` can draw them; ``MatplotlibSurface`` does it on a
matplotlib Axes.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .config import DEFAULT_SETTINGS

FUNC_ID = "func"
AXIS_ID = "axis"
ROOT_ID = "root"
LINE_ID = "iterLine"
BASE_IDS = (FUNC_ID, AXIS_ID, ROOT_ID, LINE_ID)

GRAY = "#888888"
RED = "#c74440"
ORANGE = "#fa7e19"
WHITE = "white"


def marker_id(index):
    return f"iterP{index}"


# --- Primitives ---
@dataclass(frozen=True)
class Curve:
    label: str
    expression: object
    color: str = WHITE


@dataclass(frozen=True)
class HorizontalLine:
    y: float = 0.0
    color: str = GRAY


@dataclass(frozen=True)
class Marker:
    x: float
    y: float
    color: str = ORANGE


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Tuple[float, float], ...]
    color: str = ORANGE


@dataclass(frozen=True)
class Viewport:
    left: float
    right: float
    bottom: float
    top: float


@dataclass(frozen=True)
class Plot:
    primitives: Tuple[Tuple[str, object], ...]
    viewport: Viewport

    def ids(self):
        return [pid for pid, _ in self.primitives]

    def get(self, pid):
        return dict(self.primitives)[pid]


def viewport_around(root, settings=DEFAULT_SETTINGS):
    return Viewport(
        left=root - settings.viewport_half_width,
        right=root + settings.viewport_half_width,
        bottom=-settings.viewport_half_height,
        top=settings.viewport_half_height,
    )


def build_plot(result, expression_text, f, settings=DEFAULT_SETTINGS):
    """Primitives for one successful run, in drawing order."""
    primitives = [
        (FUNC_ID, Curve(label=f"y = {expression_text}", expression=f)),
        (AXIS_ID, HorizontalLine(y=0.0, color=GRAY)),
        (ROOT_ID, Marker(x=result.root, y=0.0, color=RED)),
    ]
    points = tuple((p.x, p.fx) for p in result.trace)
    for i, (x, y) in enumerate(points):
        primitives.append((marker_id(i), Marker(x=x, y=y, color=ORANGE)))
    primitives.append((LINE_ID, Polyline(points=points, color=ORANGE)))
    return Plot(primitives=tuple(primitives), viewport=viewport_around(result.root, settings))


def retraction_ids(marker_count=0, settings=DEFAULT_SETTINGS):
    """Every id a previous rendering may have used."""
    count = max(settings.marker_id_capacity, marker_count)
    return list(BASE_IDS) + [marker_id(i) for i in range(count)]


def clear(surface, marker_count=0, settings=DEFAULT_SETTINGS):
    """Remove everything a previous rendering of ``marker_count`` markers drew.

    Surfaces that list their own ids also lose those, whatever the count.
    """
    pids = retraction_ids(marker_count, settings)
    if hasattr(surface, 'ids'):
        known = set(pids)
        pids += [pid for pid in surface.ids() if pid not in known]
    for pid in pids:
        surface.remove(pid)


def render(surface, plot, previous_marker_count=0, settings=DEFAULT_SETTINGS):
    """Retract the previous drawing, then draw ``plot`` and frame it.

    ``previous_marker_count`` is the trace length of the drawing being replaced.
    """
    clear(surface, marker_count=previous_marker_count, settings=settings)
    for pid, primitive in plot.primitives:
        surface.upsert(pid, primitive)
    surface.set_viewport(plot.viewport)


# --- Matplotlib surface ---
class MatplotlibSurface:
    """Draws primitives on a matplotlib Axes, one list of artists per id."""

    def __init__(self, ax, samples=DEFAULT_SETTINGS.curve_samples):
        self.ax = ax
        self.samples = samples
        self._artists = {}
        self._primitives = {}

    def __contains__(self, pid):
        return pid in self._artists

    def ids(self):
        return list(self._artists)

    def upsert(self, pid, primitive):
        self.remove(pid)
        self._primitives[pid] = primitive
        self._artists[pid] = self._draw(primitive)

    def remove(self, pid):
        for artist in self._artists.pop(pid, ()):
            artist.remove()
        self._primitives.pop(pid, None)

    def set_viewport(self, viewport):
        self.ax.set_xlim(viewport.left, viewport.right)
        self.ax.set_ylim(viewport.bottom, viewport.top)
        # Curves are sampled over the visible range, so redraw them
        for pid, primitive in list(self._primitives.items()):
            if isinstance(primitive, Curve):
                self.upsert(pid, primitive)
        self.draw()

    def draw(self):
        self.ax.figure.canvas.draw_idle()

    def _draw(self, primitive):
        ax = self.ax
        if isinstance(primitive, Curve):
            left, right = ax.get_xlim()
            xs = np.linspace(left, right, self.samples)
            ys = primitive.expression.sample(xs)
            return ax.plot(xs, ys, color=primitive.color, linewidth=2, label=primitive.label)
        if isinstance(primitive, HorizontalLine):
            return [ax.axhline(primitive.y, color=primitive.color, linewidth=1.2)]
        if isinstance(primitive, Marker):
            return [ax.scatter([primitive.x], [primitive.y], color=primitive.color, s=60, zorder=5)]
        if isinstance(primitive, Polyline):
            xs = [p[0] for p in primitive.points]
            ys = [p[1] for p in primitive.points]
            return ax.plot(xs, ys, color=primitive.color, linewidth=1.5, linestyle='--')
        raise TypeError(f"Cannot draw {type(primitive).__name__}")
