"""
maxwellsim: 2D Maxwell's Demon Particle Simulator

Particles bounce in a unit box split by a wall. A gate in the wall
applies a filtering rule to every particle that enters it, and that
rule alone is enough to drive the gas away from an even split.

Core concepts:
- The box and wall are plain geometry
- The gate is a pure function of a particle's velocity
- Particles are ballistic between wall hits and pairwise collisions
- Side counts and per-side temperatures show the apparent entropy drop
"""

__version__ = "0.1.0"
