# MIT License (see LICENSE)
"""
electro_sim - Charged particles and bar magnets in 2D.

This package animates point charges interacting through softened Coulomb
forces and an approximate magnetic coupling to point-dipole magnets.

Main entry points:
    - step_physics / step_physics_rk4: Advance caller-owned lists in place.
    - Simulation: Driver that owns the lists, clamps frame dt and handles
      drag pinning.
    - Charge, Magnet: Entities.
    - SimulationOptions: k, softening, damping, max_accel.

Submodules:
    - core: Fields, force accumulation, integrators, invariants.

Example:
    from electro_sim import Charge, step_physics

    charges = [Charge(q=1, position=(0, 0)), Charge(q=-1, position=(10, 0))]
    step_physics(charges, [], dt=0.01, options={"k": 100})
"""
from __future__ import annotations
import logging

from .options import SimulationOptions
from .simulation import Simulation
from .stepper import step, step_physics, step_physics_rk4, electric_field
from .types import Charge, Magnet

__all__ = [
    # Kernel entry points
    "step",
    "step_physics",
    "step_physics_rk4",
    "electric_field",
    # Driver
    "Simulation",
    # Entities and configuration
    "Charge",
    "Magnet",
    "SimulationOptions",
    "configure_logging",
]

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send electro_sim log records to the console (for scripts and examples)."""
    logger = logging.getLogger(__name__)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
