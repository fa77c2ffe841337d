from dataclasses import dataclass

MAX_ITER = 100
DERIVATIVE_FLOOR = 1e-14
VIEWPORT_HALF_WIDTH = 6.0
VIEWPORT_HALF_HEIGHT = 6.0
# Number of iterP<i> ids retracted before each redraw
MARKER_ID_CAPACITY = 200
CURVE_SAMPLES = 1000


@dataclass(frozen=True)
class SolverSettings:
    max_iter: int = MAX_ITER
    derivative_floor: float = DERIVATIVE_FLOOR
    viewport_half_width: float = VIEWPORT_HALF_WIDTH
    viewport_half_height: float = VIEWPORT_HALF_HEIGHT
    marker_id_capacity: int = MARKER_ID_CAPACITY
    curve_samples: int = CURVE_SAMPLES


DEFAULT_SETTINGS = SolverSettings()

# Initial values of the input form
DEFAULTS = {
    "function": "x**3 - x - 2",
    "x0": "1",
    "epsilon": "1e-6",
}
