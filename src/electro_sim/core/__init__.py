# MIT License (see LICENSE)
"""
Physics kernel: fields, force accumulation and integrators.

This subpackage provides:
    - Fields: electric field of charges, dipole field of magnets.
    - Forces: pairwise Coulomb with clamping, magnetic coupling.
    - Integrators: semi-implicit Euler, RK4, field-based Euler.
    - Invariants: energy and momentum for diagnostics.

Typical usage:
    from electro_sim.core import compute_accelerations, rk4_step

    rk4_step(charges, magnets, dt=1/60, options=SimulationOptions())
"""
from .fields import (
    electric_field_at,
    magnetic_field_at,
    total_magnetic_field_at,
    field_glyphs,
)
from .forces import (
    apply_coulomb_pairwise,
    apply_magnetic_coupling,
    compute_accelerations,
    compute_field_accelerations,
)
from .integrators import euler_step, rk4_step, field_euler_step
from .invariants import kinetic_energy, potential_energy, total_energy, linear_momentum

__all__ = [
    # Fields
    "electric_field_at",
    "magnetic_field_at",
    "total_magnetic_field_at",
    "field_glyphs",
    # Forces
    "apply_coulomb_pairwise",
    "apply_magnetic_coupling",
    "compute_accelerations",
    "compute_field_accelerations",
    # Integrators
    "euler_step",
    "rk4_step",
    "field_euler_step",
    # Invariants
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "linear_momentum",
]
