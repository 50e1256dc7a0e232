#!/usr/bin/env python3
"""
Demo: Temperature Sorting

The classic demon: a speed-selective gate that lets fast particles
through to the left and slow ones through to the right.
1. Start from a gas at uniform temperature
2. Run with a temperature gate and collisions on
3. Compare the chamber temperatures before and after
4. Plot speed histograms against the Maxwell-Boltzmann density
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path

from maxwellsim.analysis import kinetic_energy, record_run, side_temperatures
from maxwellsim.config import save_config
from maxwellsim.core import Simulation, SimulationConfig
from maxwellsim.logging_config import setup_logging
from maxwellsim.viz import plot_side_history, plot_speed_distribution, save_figure


def main():
    setup_logging()
    rng = np.random.default_rng(7)

    print("=" * 60)
    print("  TEMPERATURE SORTING")
    print("=" * 60)

    config = SimulationConfig(
        count=300,
        temperature=1.0,
        radius=0.005,
        gate_height=0.2,
        gate_type="temperature",
        gate_param=1.0,
        full_circle_angles=True,
    )
    output_dir = Path("output/demo_temperature_sorting")
    save_config(config, output_dir / "config.json")

    sim = Simulation(rng=rng)
    sim.configure(config)

    t_left, t_right = side_temperatures(sim)
    e_start = kinetic_energy(sim)
    print(f"\n1. Setup:")
    print(f"   Particles: {config.count}, gate threshold t={config.gate_param}")
    print(f"   T_left={t_left:.3f}, T_right={t_right:.3f}")
    print(f"   Kinetic energy: {e_start:.3f}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    plot_speed_distribution(sim, title="Speeds at Start", ax=axes[0])

    print("\n2. Running...")
    n_steps = 5000
    history = record_run(sim, n_steps, dt=0.01, every=25)
    t_left, t_right = side_temperatures(sim)
    print(f"   {n_steps} steps completed")
    print(f"   T_left={t_left:.3f}, T_right={t_right:.3f}")
    print(f"   Kinetic energy: {kinetic_energy(sim):.3f} (start {e_start:.3f})")

    print("\n3. Creating visualization...")
    plot_speed_distribution(sim, title=f"Speeds After {n_steps} Steps", ax=axes[1])
    fig.tight_layout()
    save_figure(fig, output_dir / "speeds.png")
    plt.close(fig)

    fig = plot_side_history(history, title="Temperature Gate: Chamber Populations")
    save_figure(fig, output_dir / "populations.png")
    plt.close(fig)
    print(f"   Saved: {output_dir}")

    print("\n" + "=" * 60)
    print("  SUMMARY")
    print("=" * 60)
    print(f"  • Elastic collisions keep the total energy fixed")
    print(f"  • The gate only reroutes particles by speed")
    print(f"  • Temperature gap after sorting: {t_left - t_right:+.3f}")
    print("=" * 60)


if __name__ == "__main__":
    main()
