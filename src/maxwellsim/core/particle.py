"""
Particle: a point ball moving ballistically inside a BoxStructure.

Each particle carries a two-state gate flag:
- FREE: outside the aperture, walls reflect it
- IN_GATE: inside the aperture column, moves freely

The gate filter fires once, on the FREE -> IN_GATE transition, not on
every frame the particle spends inside the aperture.

Wall reflection is a two-phase axis check: try the x move alone first,
then the full move. This approximates axis-aligned wall hits without
continuous collision detection.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from maxwellsim.core.vector import length, rotate, vec2

if TYPE_CHECKING:
    from maxwellsim.core.geometry import BoxStructure

logger = logging.getLogger(__name__)

# Consecutive rejected draws allowed when placing one particle
MAX_PLACEMENT_ATTEMPTS = 10


class PlacementError(RuntimeError):
    """No free spot found for a particle: the configuration is infeasible."""


class GateState(Enum):
    """Whether a particle is currently inside the gate aperture."""

    FREE = "free"
    IN_GATE = "in_gate"


@dataclass(eq=False)
class Particle:
    """Unit-mass point particle."""

    position: np.ndarray
    velocity: np.ndarray
    state: GateState = GateState.FREE

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64).copy()
        self.velocity = np.asarray(self.velocity, dtype=np.float64).copy()

    @property
    def inside_gate(self) -> bool:
        return self.state is GateState.IN_GATE

    @property
    def speed(self) -> float:
        return length(self.velocity)

    def step(self, geometry: "BoxStructure", dt: float, radius: float = 0.0) -> None:
        """
        Advance one tick of length ``dt`` against ``geometry``.

        Transition table, keyed on (state, tentative position in gate):
        - (FREE, outside): wall reflection, stay FREE
        - (FREE, inside): move, become IN_GATE, apply the gate filter
        - (IN_GATE, inside): move, stay IN_GATE
        - (IN_GATE, outside): wall reflection; stay IN_GATE if blocked,
          otherwise the clean move takes the particle out, become FREE
        """
        tentative = self.position + dt * self.velocity
        in_gate = geometry.gate.in_bounds(geometry, tentative, radius)

        if self.state is GateState.FREE:
            if in_gate:
                self.position = tentative
                self.state = GateState.IN_GATE
                geometry.gate.refract(self)
            else:
                self._wall_reflection(geometry, tentative, radius)
        elif in_gate:
            self.position = tentative
        elif self._wall_reflection(geometry, tentative, radius):
            logger.debug(
                "Particle still inside gate, velocity (%.4f, %.4f)",
                self.velocity[0], self.velocity[1],
            )
        else:
            self.state = GateState.FREE

    def _wall_reflection(
        self, geometry: "BoxStructure", tentative: np.ndarray, radius: float
    ) -> bool:
        """
        Reflect off whatever blocks ``tentative``, or move there.

        Returns:
            True if a velocity component was flipped (no move),
            False if the particle moved cleanly to ``tentative``
        """
        x_only = vec2(tentative[0], self.position[1])
        if geometry.in_bounds(x_only, radius):
            self.velocity[0] = -self.velocity[0]
        elif geometry.in_bounds(tentative, radius):
            self.velocity[1] = -self.velocity[1]
        else:
            self.position = tentative
            return False
        return True


def random_particle(
    geometry: "BoxStructure",
    temperature: float,
    radius: float,
    rng: np.random.Generator,
    full_circle_angles: bool = False,
) -> Particle:
    """
    Place a particle at a random free spot with a thermal random velocity.

    Position is rejection-sampled uniformly over the box until it lands
    outside walls and box edges. Speed is N(0, 1) * sqrt(temperature).

    The direction angle is the raw uniform [0, 1) draw used as radians,
    which only covers about 57 degrees. Pass ``full_circle_angles=True``
    to scale it to [0, 2π) instead.

    Raises:
        ValueError: temperature < 0
        PlacementError: MAX_PLACEMENT_ATTEMPTS rejected draws in a row
    """
    if temperature < 0.0:
        raise ValueError(f"Temperature must be non-negative, got {temperature}")

    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        point = vec2(rng.random() * geometry.width, rng.random() * geometry.height)
        if not geometry.in_bounds(point, radius):
            break
    else:
        raise PlacementError(
            f"Impossible to place particle in box after {MAX_PLACEMENT_ATTEMPTS} "
            f"attempts (radius={radius}, wall width={geometry.wall_width})"
        )

    speed = rng.standard_normal() * math.sqrt(temperature)
    theta = rng.random()
    if full_circle_angles:
        theta *= 2.0 * math.pi
    velocity = rotate(vec2(speed, 0.0), theta)
    return Particle(position=point, velocity=velocity)
