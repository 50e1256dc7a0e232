"""
Core engine primitives.

This layer knows NOTHING about entropy, temperatures per chamber, or plots.
It only knows:
- A box split by a wall with a gate in it
- Gate filter rules that rewrite velocities on entry
- Particles stepping against walls and the gate
- Pairwise elastic collisions
- Random (rejection-sampled) initialization
"""

from maxwellsim.core.gate import (
    GATE_TYPES,
    DiodeFilter,
    EmptyFilter,
    Gate,
    GateFilter,
    PhaseConservingFilter,
    TemperatureFilter,
    TennisFilter,
    make_filter,
)
from maxwellsim.core.geometry import BoxStructure
from maxwellsim.core.particle import (
    MAX_PLACEMENT_ATTEMPTS,
    GateState,
    Particle,
    PlacementError,
    random_particle,
)
from maxwellsim.core.collisions import elastic_collision, find_colliding_pairs, resolve_collisions
from maxwellsim.core.simulation import DEFAULT_DT, Simulation, SimulationConfig

__all__ = [
    "GATE_TYPES",
    "DiodeFilter",
    "EmptyFilter",
    "Gate",
    "GateFilter",
    "PhaseConservingFilter",
    "TemperatureFilter",
    "TennisFilter",
    "make_filter",
    "BoxStructure",
    "MAX_PLACEMENT_ATTEMPTS",
    "GateState",
    "Particle",
    "PlacementError",
    "random_particle",
    "elastic_collision",
    "find_colliding_pairs",
    "resolve_collisions",
    "DEFAULT_DT",
    "Simulation",
    "SimulationConfig",
]
