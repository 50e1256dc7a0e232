"""
Save and load SimulationConfig as JSON.

Only the configuration scalars are stored. Missing keys fall back to
the dataclass defaults so files written by older versions still load.
"""

from __future__ import annotations
from dataclasses import asdict, fields
import json
import logging
from pathlib import Path

from maxwellsim.core.simulation import SimulationConfig

logger = logging.getLogger(__name__)


def config_to_dict(config: SimulationConfig) -> dict:
    return asdict(config)


def config_from_dict(data: dict) -> SimulationConfig:
    """Build a validated config; unknown keys are dropped with a warning."""
    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    config = SimulationConfig(**{k: v for k, v in data.items() if k in known})
    config.validate()
    return config


def save_config(config: SimulationConfig, path: str | Path) -> Path:
    """Write ``config`` to ``path`` (parent directories are created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_to_dict(config), f, indent=2)
    logger.info("Saved configuration to %s", path)
    return path


def load_config(path: str | Path) -> SimulationConfig:
    """Read a config written by save_config."""
    logger.info("Loading configuration from %s...", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.error("Configuration file not found at %s.", path)
        raise
    except json.JSONDecodeError:
        logger.error("Error decoding JSON from %s.", path)
        raise
    return config_from_dict(data)
