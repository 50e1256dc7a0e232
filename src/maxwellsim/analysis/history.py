"""
Record how the left/right split evolves over a run.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats

from maxwellsim.core.simulation import DEFAULT_DT

if TYPE_CHECKING:
    from maxwellsim.core.simulation import Simulation


@dataclass
class SideHistory:
    """Bounded record of (step, left, right) samples."""

    max_length: int = 5000
    steps: list[int] = field(default_factory=list)
    left: list[int] = field(default_factory=list)
    right: list[int] = field(default_factory=list)

    def record(self, simulation: "Simulation") -> None:
        n_left, n_right = simulation.count_by_side()
        self.steps.append(simulation.current_step)
        self.left.append(n_left)
        self.right.append(n_right)
        if len(self.steps) > self.max_length:
            del self.steps[0], self.left[0], self.right[0]

    def __len__(self) -> int:
        return len(self.steps)

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(steps, left, right) as int arrays."""
        return (
            np.asarray(self.steps, dtype=np.int64),
            np.asarray(self.left, dtype=np.int64),
            np.asarray(self.right, dtype=np.int64),
        )

    def left_fraction(self) -> np.ndarray:
        _, left, right = self.as_arrays()
        total = left + right
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.where(total > 0, left / np.maximum(total, 1), np.nan)

    def entropy(self) -> np.ndarray:
        """Mixing entropy (nats) of each sample; 0 for empty samples."""
        _, left, right = self.as_arrays()
        counts = np.stack([left, right]).astype(np.float64)
        totals = counts.sum(axis=0)
        out = np.zeros(len(self), dtype=np.float64)
        nonempty = totals > 0
        if np.any(nonempty):
            out[nonempty] = stats.entropy(counts[:, nonempty], axis=0)
        return out


def record_run(
    simulation: "Simulation",
    n_steps: int,
    dt: float = DEFAULT_DT,
    every: int = 1,
    history: SideHistory | None = None,
) -> SideHistory:
    """
    Step ``simulation`` n_steps times, sampling the split every ``every`` steps.

    The state before the first step is recorded too.
    """
    if every < 1:
        raise ValueError(f"Sampling interval must be >= 1, got {every}")
    if history is None:
        history = SideHistory()

    history.record(simulation)
    for i in range(1, n_steps + 1):
        simulation.step(dt)
        if i % every == 0:
            history.record(simulation)
    return history
