"""
BoxStructure: the unit box, the dividing wall, and the gate in it.

The geometry stores ONLY static shapes:
- The box [0, width] x [0, height]
- A solid wall band [wall_left, wall_right] centered on x = width / 2
- The gate, which opens part of the wall band

It is replaced wholesale on reconfiguration, never edited in place.
"""

from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from maxwellsim.core.gate import DiodeFilter, Gate

DEFAULT_WALL_WIDTH = 0.04


@dataclass(frozen=True)
class BoxStructure:
    """Box with a wall band and a gate. Invariant: 0 <= wall_left < wall_right <= width."""

    gate: Gate = field(default_factory=lambda: Gate.from_height(DiodeFilter(), 0.0))
    width: float = 1.0
    height: float = 1.0
    wall_left: float = 0.5 - DEFAULT_WALL_WIDTH / 2
    wall_right: float = 0.5 + DEFAULT_WALL_WIDTH / 2

    def __post_init__(self):
        if not (0.0 <= self.wall_left < self.wall_right <= self.width):
            raise ValueError(
                f"Wall band [{self.wall_left}, {self.wall_right}] must lie inside "
                f"[0, {self.width}] with positive width"
            )

    @classmethod
    def with_wall(
        cls,
        gate: Gate,
        wall_width: float = DEFAULT_WALL_WIDTH,
        width: float = 1.0,
        height: float = 1.0,
    ) -> BoxStructure:
        """Box whose wall band of ``wall_width`` is centered on the midline."""
        mid = width / 2.0
        return cls(
            gate=gate,
            width=width,
            height=height,
            wall_left=mid - wall_width / 2.0,
            wall_right=mid + wall_width / 2.0,
        )

    @property
    def midline(self) -> float:
        """x coordinate splitting the left and right chambers."""
        return self.width * 0.5

    @property
    def wall_width(self) -> float:
        return self.wall_right - self.wall_left

    def in_bounds(self, point: np.ndarray, radius: float = 0.0) -> bool:
        """
        True where a particle center of ``radius`` may NOT be.

        That is outside the box or inside the wall band (both inflated by
        ``radius``), unless the point is inside the open gate aperture.
        """
        x, y = point[0], point[1]
        out_of_box = (
            x > self.width - radius
            or y > self.height - radius
            or x < radius
            or y < radius
        )
        in_wall = self.wall_left - radius < x < self.wall_right + radius
        return (out_of_box or in_wall) and not self.gate.in_bounds(self, point, radius)
