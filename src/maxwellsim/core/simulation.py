"""
Simulation: owns the geometry and the particle collection.

Each tick runs in two phases, in this order:
1. Resolve all pairwise collisions (velocities only, look-ahead detection)
2. Step every particle against the geometry (walls, gate)

Reconfiguration builds a new geometry and a new particle list and only
swaps them in once everything succeeded. A failed configure leaves the
previous state untouched.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import logging
from typing import Iterable

import numpy as np

from maxwellsim.core.collisions import resolve_collisions
from maxwellsim.core.gate import GATE_TYPES, Gate, make_filter
from maxwellsim.core.geometry import DEFAULT_WALL_WIDTH, BoxStructure
from maxwellsim.core.particle import Particle, PlacementError, random_particle

logger = logging.getLogger(__name__)

# Frame tick used by the interactive loop
DEFAULT_DT = 0.01


@dataclass
class SimulationConfig:
    """
    Scalars that fully describe a simulation setup.

    These are the only values worth persisting: runtime particle state is
    regenerated from them.
    """

    count: int = 30  # Number of particles
    temperature: float = 1.0  # Speed scale: |v| ~ N(0, 1) * sqrt(T)
    radius: float = 0.01  # Collision radius (box units)
    gate_height: float = 0.0  # Aperture height, 0 = closed
    gate_type: str = "diode"  # One of GATE_TYPES
    gate_param: float = 0.0  # t for "temperature", c for "phase_conserving"
    collisions_enabled: bool = True
    wall_width: float = DEFAULT_WALL_WIDTH
    full_circle_angles: bool = False  # Sample directions over [0, 2π)

    def validate(self) -> None:
        """Raise ValueError if any scalar is out of range."""
        if self.count < 0:
            raise ValueError(f"Particle count must be non-negative, got {self.count}")
        if self.temperature < 0:
            raise ValueError(f"Temperature must be non-negative, got {self.temperature}")
        if self.radius < 0:
            raise ValueError(f"Radius must be non-negative, got {self.radius}")
        if not 0.0 <= self.gate_height <= 1.0:
            raise ValueError(f"Gate height must be in [0, 1], got {self.gate_height}")
        if not 0.0 < self.wall_width <= 1.0:
            raise ValueError(f"Wall width must be in (0, 1], got {self.wall_width}")
        if self.gate_type not in GATE_TYPES:
            raise ValueError(
                f"Unknown gate type: {self.gate_type!r} (expected one of {GATE_TYPES})"
            )

    def build_geometry(self) -> BoxStructure:
        """Geometry and gate described by this config."""
        gate = Gate.from_height(make_filter(self.gate_type, self.gate_param), self.gate_height)
        return BoxStructure.with_wall(gate, wall_width=self.wall_width)


class Simulation:
    """
    Maxwell's demon particle box.

    A fresh simulation has a closed diode gate and no particles.
    """

    def __init__(self, rng: np.random.Generator | None = None):
        """
        Args:
            rng: Random source for initialization. Defaults to an unseeded
                 numpy Generator; pass a seeded one for reproducible runs.
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = SimulationConfig(count=0)
        self.geometry = self.config.build_geometry()
        self._particles: list[Particle] = []
        self.current_step = 0

    # ------------------------------------------------------------------
    # Configuration

    @property
    def collision_radius(self) -> float:
        return self.config.radius

    @property
    def collisions_enabled(self) -> bool:
        return self.config.collisions_enabled

    def configure(
        self,
        config: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
        **overrides,
    ) -> None:
        """
        Replace geometry, gate and particles in one step.

        Args:
            config: Full configuration (defaults to the current one)
            rng: Random source for this and later initializations
            **overrides: SimulationConfig fields to change

        Raises:
            ValueError: Invalid configuration scalars
            PlacementError: Particles cannot be placed in the geometry
        """
        config = replace(config if config is not None else self.config, **overrides)
        config.validate()
        rng = rng if rng is not None else self.rng

        geometry = config.build_geometry()
        particles = []
        for index in range(config.count):
            try:
                particles.append(
                    random_particle(
                        geometry,
                        config.temperature,
                        config.radius,
                        rng,
                        full_circle_angles=config.full_circle_angles,
                    )
                )
            except PlacementError as exc:
                logger.error(
                    "Could not place particle %d of %d (radius=%s, wall_width=%s)",
                    index, config.count, config.radius, config.wall_width,
                )
                raise PlacementError(f"Particle {index} of {config.count}: {exc}") from exc

        self.config = config
        self.rng = rng
        self.geometry = geometry
        self._particles = particles
        self.current_step = 0

        logger.info(
            "Configured %d particles, gate=%s (h=%s), T=%s, collisions=%s",
            config.count, config.gate_type, config.gate_height,
            config.temperature, config.collisions_enabled,
        )

    def random_initiation(
        self,
        count: int,
        temperature: float,
        radius: float = 0.01,
        gate_height: float = 0.0,
        gate_type: str = "diode",
        gate_param: float = 0.0,
        collisions_enabled: bool = True,
        wall_width: float = DEFAULT_WALL_WIDTH,
    ) -> None:
        """Scalar-argument form of configure()."""
        self.configure(
            SimulationConfig(
                count=count,
                temperature=temperature,
                radius=radius,
                gate_height=gate_height,
                gate_type=gate_type,
                gate_param=gate_param,
                collisions_enabled=collisions_enabled,
                wall_width=wall_width,
                full_circle_angles=self.config.full_circle_angles,
            )
        )

    def place_particles(self, particles: Iterable[Particle]) -> None:
        """Replace the whole particle collection with explicit particles."""
        self._particles = list(particles)
        self.current_step = 0

    # ------------------------------------------------------------------
    # Dynamics

    def step(self, dt: float = DEFAULT_DT) -> None:
        """Advance every particle by one tick of length ``dt``."""
        if dt < 0:
            raise ValueError(f"Time step must be non-negative, got {dt}")

        if self.config.collisions_enabled:
            resolve_collisions(self._particles, self.config.radius, dt)

        for particle in self._particles:
            particle.step(self.geometry, dt, self.config.radius)

        self.current_step += 1

    def run(self, n_steps: int, dt: float = DEFAULT_DT) -> dict:
        """
        Run for ``n_steps`` ticks.

        Returns:
            Statistics dictionary
        """
        for _ in range(n_steps):
            self.step(dt)

        left, right = self.count_by_side()
        return {
            "n_steps": n_steps,
            "current_step": self.current_step,
            "left": left,
            "right": right,
            "kinetic_energy": 0.5 * float(np.sum(self.velocities ** 2)),
        }

    # ------------------------------------------------------------------
    # Read-only views

    def count_by_side(self) -> tuple[int, int]:
        """(particles with x < midline, all others)."""
        mid = self.geometry.midline
        n_left = sum(1 for p in self._particles if p.position[0] < mid)
        return n_left, len(self._particles) - n_left

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    @property
    def positions(self) -> np.ndarray:
        """(N, 2) copy of particle positions."""
        if not self._particles:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([p.position for p in self._particles])

    @property
    def velocities(self) -> np.ndarray:
        """(N, 2) copy of particle velocities."""
        if not self._particles:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([p.velocity for p in self._particles])

    def __len__(self) -> int:
        return len(self._particles)
