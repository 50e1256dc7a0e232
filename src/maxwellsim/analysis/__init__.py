"""
Analysis layer: derived quantities for diagnostics and plots.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- kinetic_energy, side_temperatures: per-chamber thermodynamics
- left_fraction, mixing_entropy: how far the gate pushed the split
- SideHistory, record_run: the split over time
"""

from maxwellsim.analysis.observables import (
    kinetic_energy,
    side_temperatures,
    left_fraction,
    mixing_entropy,
)
from maxwellsim.analysis.history import SideHistory, record_run

__all__ = [
    "kinetic_energy",
    "side_temperatures",
    "left_fraction",
    "mixing_entropy",
    "SideHistory",
    "record_run",
]
