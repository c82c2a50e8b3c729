# MIT License (see LICENSE)
"""
Conserved quantities for checking integrator quality.

With damping = 1, no magnets and no clamping active, the total of
kinetic_energy() and potential_energy() is conserved by the exact dynamics,
so its drift measures integration error. Momentum is conserved only while
no pairwise clamp engages and all charges are free.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..options import SimulationOptions
from ..types import Charge
from ..util import norm2


def kinetic_energy(charges: Sequence[Charge]) -> float:
    """T = Σ 0.5 m v²."""
    ke = 0.0
    for c in charges:
        ke += 0.5 * c.mass * norm2(c.velocity)
    return ke


def potential_energy(charges: Sequence[Charge], options: SimulationOptions) -> float:
    """
    Softened Coulomb potential energy.

    U = Σ_{i<j} k q_i q_j / sqrt(|x_i - x_j|² + ε²)

    Its negative gradient is exactly the pairwise force used by
    compute_accelerations() (before clamping).
    """
    eps2 = options.softening * options.softening
    u = 0.0
    n = len(charges)
    for i in range(n):
        a = charges[i]
        for j in range(i + 1, n):
            b = charges[j]
            r2 = norm2(a.position - b.position) + eps2
            u += options.k * a.q * b.q / float(np.sqrt(r2))
    return u


def total_energy(charges: Sequence[Charge], options: SimulationOptions) -> float:
    """Kinetic plus softened electrostatic potential energy."""
    return kinetic_energy(charges) + potential_energy(charges, options)


def linear_momentum(charges: Sequence[Charge]) -> np.ndarray:
    """P = Σ m v as [Px, Py]."""
    p = np.zeros(2, dtype=np.float64)
    for c in charges:
        p += c.mass * c.velocity
    return p
