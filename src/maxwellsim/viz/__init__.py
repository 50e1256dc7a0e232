"""
Visualization utilities.

- Chamber populations over time
- Speed distributions
"""

from maxwellsim.viz.history import (
    plot_side_history,
    plot_speed_distribution,
    save_figure,
)

__all__ = [
    "plot_side_history",
    "plot_speed_distribution",
    "save_figure",
]
