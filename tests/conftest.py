"""
Pytest configuration for newton_graph tests.

Selects the non-interactive Agg backend so plotting tests run without a display.
"""

import matplotlib

matplotlib.use("Agg")
