"""
Pairwise elastic collisions between equal-mass particles.

Detection uses look-ahead positions p + dt·v as an oracle only. Positions
are never touched here: the following per-particle step integrates them
with the updated velocities.

Resolution is a single transaction over velocities. Every colliding
pair is solved from the same pre-step snapshot and the resulting
velocity changes are summed per particle, then committed at once. A
particle in exactly one pair gets the exact two-body result. Every pair
contributes zero net momentum, so the total is conserved in all cases.
"""

from __future__ import annotations
import logging
from typing import Sequence, TYPE_CHECKING

import numpy as np
from scipy.spatial import cKDTree

if TYPE_CHECKING:
    from maxwellsim.core.particle import Particle

logger = logging.getLogger(__name__)


def elastic_collision(
    v_i: np.ndarray, v_j: np.ndarray, delta: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """
    Post-collision velocities for equal masses.

    With cm = (v_i + v_j) / 2 and θ the angle of ``delta``:
        v_i' = cm - R(θ)·(v_j - cm)
        v_j' = cm - R(θ)·(v_i - cm)

    Works on single vectors of shape (2,) or batches of shape (k, 2).
    Momentum and kinetic energy are conserved exactly since R(θ) is a
    rotation. ``delta`` must be non-zero.
    """
    v_i = np.asarray(v_i, dtype=np.float64)
    v_j = np.asarray(v_j, dtype=np.float64)
    delta = np.asarray(delta, dtype=np.float64)

    cm = (v_i + v_j) / 2.0
    theta = np.arctan2(delta[..., 1], delta[..., 0])
    c, s = np.cos(theta), np.sin(theta)

    def rot(w):
        return np.stack([c * w[..., 0] - s * w[..., 1], s * w[..., 0] + c * w[..., 1]], axis=-1)

    return cm - rot(v_j - cm), cm - rot(v_i - cm)


def find_colliding_pairs(
    positions: np.ndarray,
    velocities: np.ndarray,
    radius: float,
    dt: float,
) -> np.ndarray:
    """
    Index pairs (i, j), i < j, whose look-ahead centers are within 2·radius.

    Pairs whose current x coordinates are more than 10·radius apart are
    skipped even when their look-ahead centers touch.

    Args:
        positions, velocities: (N, 2) arrays
        radius: Collision radius of every particle
        dt: Look-ahead time step

    Returns:
        (k, 2) int array sorted by (i, j)
    """
    n = len(positions)
    if n < 2:
        return np.empty((0, 2), dtype=np.intp)

    tentative = positions + dt * velocities
    tree = cKDTree(tentative)
    pairs = tree.query_pairs(2.0 * radius, output_type="ndarray")
    if len(pairs) == 0:
        return np.empty((0, 2), dtype=np.intp)

    # Cheap reject on the current, un-advanced x coordinates
    dx = np.abs(positions[pairs[:, 0], 0] - positions[pairs[:, 1], 0])
    pairs = pairs[dx <= 10.0 * radius]
    if len(pairs) == 0:
        return np.empty((0, 2), dtype=np.intp)

    pairs = np.sort(pairs.astype(np.intp), axis=1)
    order = np.lexsort((pairs[:, 1], pairs[:, 0]))
    return pairs[order]


def resolve_collisions(particles: Sequence["Particle"], radius: float, dt: float) -> int:
    """
    Detect and resolve all particle-particle collisions for one tick.

    Mutates velocities only.

    Returns:
        Number of pairs resolved (zero-length contacts are skipped)
    """
    if len(particles) < 2:
        return 0

    positions = np.array([p.position for p in particles])
    velocities = np.array([p.velocity for p in particles])

    pairs = find_colliding_pairs(positions, velocities, radius, dt)
    if len(pairs) == 0:
        return 0

    i_idx, j_idx = pairs[:, 0], pairs[:, 1]
    tentative = positions + dt * velocities
    delta = tentative[i_idx] - tentative[j_idx]

    # Coincident centers have no collision normal
    valid = np.hypot(delta[:, 0], delta[:, 1]) > 0.0
    if not np.all(valid):
        logger.debug("Skipping %d coincident collision pair(s)", int(np.sum(~valid)))
        i_idx, j_idx, delta = i_idx[valid], j_idx[valid], delta[valid]
        if len(i_idx) == 0:
            return 0

    v_i, v_j = velocities[i_idx], velocities[j_idx]
    new_i, new_j = elastic_collision(v_i, v_j, delta)

    dv = np.zeros_like(velocities)
    np.add.at(dv, i_idx, new_i - v_i)
    np.add.at(dv, j_idx, new_j - v_j)

    for k in np.unique(np.concatenate([i_idx, j_idx])):
        particles[k].velocity += dv[k]

    return len(i_idx)
