"""
Thermodynamic observables of a Simulation.

Units: unit mass, unit Boltzmann constant, two degrees of freedom, so
the temperature of a group of particles is <|v|²> / 2.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats

if TYPE_CHECKING:
    from maxwellsim.core.simulation import Simulation


def kinetic_energy(simulation: "Simulation") -> float:
    """Total kinetic energy ½Σ|v|²."""
    v = simulation.velocities
    return 0.5 * float(np.sum(v ** 2))


def _left_mask(simulation: "Simulation") -> np.ndarray:
    return simulation.positions[:, 0] < simulation.geometry.midline


def side_temperatures(simulation: "Simulation") -> tuple[float, float]:
    """
    Kinetic temperature of the left and right chambers.

    A chamber with no particles has temperature nan.
    """
    v2 = np.sum(simulation.velocities ** 2, axis=1)
    left = _left_mask(simulation)

    def temperature(mask):
        if not np.any(mask):
            return float("nan")
        return float(np.mean(v2[mask]) / 2.0)

    return temperature(left), temperature(~left)


def left_fraction(simulation: "Simulation") -> float:
    """Share of particles in the left chamber (nan when empty)."""
    left, right = simulation.count_by_side()
    total = left + right
    if total == 0:
        return float("nan")
    return left / total


def mixing_entropy(simulation: "Simulation") -> float:
    """
    Entropy of the left/right split, in nats.

    -(p ln p + (1 - p) ln(1 - p)) with p the left fraction. Peaks at ln 2
    for an even split and drops as the gate herds particles to one side.
    An empty box has entropy 0.
    """
    left, right = simulation.count_by_side()
    if left + right == 0:
        return 0.0
    return float(stats.entropy([left, right]))
