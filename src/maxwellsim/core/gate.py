"""
Gate: the selective aperture in the dividing wall (the "demon").

The gate owns two things:
- The aperture geometry: a vertical band [bottom, top] inside the wall column
- The filter: a rule that rewrites a particle's velocity when it enters

The filter is a closed set of variants. Each variant is a small frozen
dataclass and Gate.refract dispatches on the variant type. Refraction
touches velocity only, never position.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union
import math

import numpy as np

from maxwellsim.core.vector import angle, length

if TYPE_CHECKING:
    from maxwellsim.core.geometry import BoxStructure
    from maxwellsim.core.particle import Particle


@dataclass(frozen=True)
class EmptyFilter:
    """Transparent gate: particles pass untouched."""


@dataclass(frozen=True)
class DiodeFilter:
    """One-way valve: leftward particles are bounced back."""


@dataclass(frozen=True)
class TemperatureFilter:
    """
    Speed-selective gate.

    Slow leftward particles are reflected, as are rightward particles
    with vx² above the threshold ``t``.
    """

    t: float = 1.0


@dataclass(frozen=True)
class TennisFilter:
    """Deterministic velocity redirection biased toward one orientation."""


@dataclass(frozen=True)
class PhaseConservingFilter:
    """
    Shifts sin(angle) of the velocity by ``c`` while keeping the speed.

    Falls back to reflecting vx when the shifted sine leaves [-1, 1].
    """

    c: float = 0.0


GateFilter = Union[
    EmptyFilter, DiodeFilter, TemperatureFilter, TennisFilter, PhaseConservingFilter
]

# Names accepted by make_filter / SimulationConfig.gate_type
GATE_TYPES = ("empty", "diode", "temperature", "tennis", "phase_conserving")


def make_filter(gate_type: str, param: float = 0.0) -> GateFilter:
    """
    Build a filter variant from its name.

    Args:
        gate_type: One of GATE_TYPES
        param: Threshold ``t`` for "temperature", shift ``c`` for
               "phase_conserving"; ignored by the other variants
    """
    if gate_type == "empty":
        return EmptyFilter()
    if gate_type == "diode":
        return DiodeFilter()
    if gate_type == "temperature":
        return TemperatureFilter(t=float(param))
    if gate_type == "tennis":
        return TennisFilter()
    if gate_type == "phase_conserving":
        return PhaseConservingFilter(c=float(param))
    raise ValueError(f"Unknown gate type: {gate_type!r}")


@dataclass(frozen=True)
class Gate:
    """
    Aperture band plus filter rule.

    ``top == bottom`` means the aperture is closed: in_bounds is always
    False and nothing can pass through the wall.
    """

    filter: GateFilter
    top: float = 0.5
    bottom: float = 0.5

    @classmethod
    def from_height(cls, filter: GateFilter, h: float) -> Gate:
        """Centered aperture of height ``h`` (fraction of the box height)."""
        return cls(filter=filter, top=(1.0 + h) / 2.0, bottom=(1.0 - h) / 2.0)

    @property
    def is_closed(self) -> bool:
        return self.top == self.bottom

    def in_bounds(
        self, geometry: "BoxStructure", point: np.ndarray, radius: float = 0.0
    ) -> bool:
        """
        True if ``point`` is strictly inside the aperture.

        The wall column is inflated outward by ``radius`` and the aperture
        band is shrunk inward by ``radius``, so a particle of that radius
        fits through the opening without touching the wall.
        """
        if self.is_closed:
            return False
        x, y = point[0], point[1]
        inside_wall = geometry.wall_left - radius < x < geometry.wall_right + radius
        inside_aperture = self.bottom + radius < y < self.top - radius
        return inside_wall and inside_aperture

    def refract(self, particle: "Particle") -> None:
        """Apply the filter rule to the particle's velocity (in place)."""
        v = particle.velocity

        match self.filter:
            case EmptyFilter():
                pass

            case DiodeFilter():
                if v[0] < 0.0:
                    v[0] = -v[0]

            case TemperatureFilter(t=t):
                if v[0] < 0.0:
                    if v[0] ** 2 < 1.0:
                        v[0] = -v[0]
                elif v[0] ** 2 > t:
                    v[0] = -v[0]

            case TennisFilter():
                vx, vy = v[0], v[1]
                # Branch order matters: the conditions overlap
                if vx * vy >= 0.0 and vx < vy:
                    v[0], v[1] = vy, vx
                elif (vx < 0.0 and vy > 0.0 and abs(vx) > abs(vy)) or (
                    vx > 0.0 and vy < 0.0 and abs(vx) < abs(vy)
                ):
                    v[0], v[1] = -vy, -vx
                else:
                    v[0] = -vx

            case PhaseConservingFilter(c=c):
                speed = length(v)
                theta = angle(v)
                new_sin = math.sin(theta) + c
                if abs(new_sin) <= 1.0:
                    if abs(theta) < math.pi / 2:
                        new_theta = math.asin(new_sin)
                    else:
                        new_theta = math.pi - math.asin(new_sin)
                    v[0] = speed * math.cos(new_theta)
                    v[1] = speed * math.sin(new_theta)
                else:
                    v[0] = -v[0]

            case other:
                raise TypeError(f"Unsupported gate filter: {other!r}")

    def coords(self, geometry: "BoxStructure") -> tuple[tuple[float, float], tuple[float, float]]:
        """Aperture rectangle as ((x0, y0), (x1, y1)) in box units."""
        return (
            (geometry.wall_left, self.bottom),
            (geometry.wall_right, self.top),
        )
