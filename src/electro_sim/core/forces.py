# MIT License (see LICENSE)
"""
Acceleration accumulation for a set of charges.

compute_accelerations() is the force pass run before (Euler) or during
(RK4) every integration step. It overwrites Charge.acceleration for every
charge, pinned or not, and touches nothing else.

Two approximations are deliberate and must be kept as they are, because the
simulated trajectories depend on them:

- Clamping happens per pair and per side. Each pairwise contribution is
  capped at max_accel before it is added, but the sum is not. A charge
  inside a dense cluster can therefore end up well above max_accel.
- The magnetic term is not q v × B. The velocity is rotated by +90°,
  normalized, and scaled by q |B| |v|. It always acts perpendicular to v
  but ignores the direction of B.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..options import SimulationOptions
from ..types import Charge, Magnet
from ..util import norm2, norm, perp, clamp_magnitude
from .fields import total_magnetic_field_at


def apply_coulomb_pairwise(charges: Sequence[Charge], k: float, softening: float, max_accel: float) -> None:
    """
    Add softened Coulomb accelerations for every unordered pair i < j.

    Implements F = k q_i q_j Δ / (|Δ|² + ε²)^(3/2) with Δ = x_i - x_j, then
    a_i += clamp(F / m_i) and a_j += clamp(-F / m_j).

    Complexity: O(N²).
    """
    eps2 = softening * softening
    n = len(charges)
    for i in range(n):
        a = charges[i]
        for j in range(i + 1, n):
            b = charges[j]
            d = a.position - b.position
            r2 = norm2(d) + eps2
            r = np.sqrt(r2)
            inv_r3 = 1.0 / (r * r2)
            f = (k * a.q * b.q * inv_r3) * d

            a.acceleration += clamp_magnitude(f / a.mass, max_accel)
            b.acceleration += clamp_magnitude(-f / b.mass, max_accel)


def apply_magnetic_coupling(charges: Sequence[Charge], magnets: Sequence[Magnet], softening: float) -> None:
    """
    Add the velocity-rotation magnetic term to every moving charge.

    With B the total dipole field at the charge and v its velocity:

        F = q * unit(perp(v)) * |B| * |v|,   a += F / m

    Skipped when |v| == 0 or |B| == 0. Not clamped.
    """
    if not magnets:
        return
    for c in charges:
        B = total_magnetic_field_at(c.position, magnets, softening)
        b_mag = norm(B)
        v_mag = norm(c.velocity)
        if v_mag > 0.0 and b_mag > 0.0:
            p = perp(c.velocity)
            f = c.q * (p / norm(p)) * b_mag * v_mag
            c.acceleration += f / c.mass


def compute_accelerations(
    charges: Sequence[Charge],
    magnets: Sequence[Magnet],
    options: SimulationOptions,
) -> None:
    """
    Recompute Charge.acceleration for all charges.

    1. Zero every acceleration.
    2. Pairwise electrostatics with per-contribution clamping.
    3. Magnetic coupling from all magnets.

    Args:
        charges: Charges to update (mutated: acceleration only).
        magnets: Field sources (not mutated).
        options: k, softening and max_accel are read; damping is not.
    """
    for c in charges:
        c.acceleration[:] = 0.0
    apply_coulomb_pairwise(charges, options.k, options.softening, options.max_accel)
    apply_magnetic_coupling(charges, magnets, options.softening)


def compute_field_accelerations(charges: Sequence[Charge], options: SimulationOptions) -> None:
    """
    Field-based variant: a_i = q_i E_i / m_i, E_i from all other charges.

    Same softened Coulomb law as compute_accelerations(), but evaluated as a
    field per charge. No clamping and no magnets. Mutates acceleration only.
    """
    eps2 = options.softening * options.softening
    k = options.k
    for i, c in enumerate(charges):
        E = np.zeros(2, dtype=np.float64)
        for j, o in enumerate(charges):
            if i == j:
                continue
            d = c.position - o.position
            r2 = norm2(d) + eps2
            inv_r3 = 1.0 / (np.sqrt(r2) * r2)
            E += (k * o.q * inv_r3) * d
        c.acceleration[:] = (c.q * E) / c.mass
