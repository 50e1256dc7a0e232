"""
Plots of run diagnostics.

- Left/right particle counts (and mixing entropy) over time
- Speed histogram against the 2D Maxwell-Boltzmann density

This does not draw the particles themselves.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from scipy import stats

if TYPE_CHECKING:
    from maxwellsim.analysis.history import SideHistory
    from maxwellsim.core.simulation import Simulation


COLOR_LEFT = "#1f77b4"
COLOR_RIGHT = "#d62728"


def plot_side_history(
    history: "SideHistory",
    title: str = "Chamber Populations",
    show_entropy: bool = True,
    figsize: tuple[float, float] = (10, 5),
) -> Figure:
    """
    Plot left/right counts over time.

    Args:
        history: Recorded SideHistory
        title: Plot title
        show_entropy: Add the mixing entropy on a twin axis

    Returns:
        Figure
    """
    steps, left, right = history.as_arrays()

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(steps, left, color=COLOR_LEFT, linewidth=2, label="Left")
    ax.plot(steps, right, color=COLOR_RIGHT, linewidth=2, label="Right")
    ax.set_xlabel("Step")
    ax.set_ylabel("Particles")
    ax.grid(True, alpha=0.3)

    if show_entropy and len(history) > 0:
        ax2 = ax.twinx()
        ax2.plot(steps, history.entropy(), color="gray", linestyle="--", label="Entropy")
        ax2.axhline(np.log(2.0), color="gray", linestyle=":", alpha=0.5)
        ax2.set_ylabel("Mixing entropy (nats)")
        ax2.set_ylim(0, 1.05 * np.log(2.0))
        ax2.legend(loc="upper right")

    ax.legend(loc="upper left")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def plot_speed_distribution(
    simulation: "Simulation",
    bins: int = 30,
    title: str = "Speed Distribution",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 5),
) -> tuple[Figure, Axes]:
    """
    Histogram of particle speeds with the Rayleigh density at the gas temperature.

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    v = simulation.velocities
    speeds = np.hypot(v[:, 0], v[:, 1])

    if len(speeds) > 0:
        ax.hist(speeds, bins=bins, density=True, alpha=0.6, color=COLOR_LEFT, label="Simulation")

        # 2D Maxwell-Boltzmann speeds are Rayleigh with sigma² = kT/m = <|v|²>/2
        sigma = np.sqrt(np.mean(speeds ** 2) / 2.0)
        if sigma > 0:
            grid = np.linspace(0.0, speeds.max() * 1.1, 200)
            ax.plot(grid, stats.rayleigh.pdf(grid, scale=sigma), color="black", linewidth=2, label="Maxwell-Boltzmann")

    ax.set_xlabel("Speed")
    ax.set_ylabel("Density")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
