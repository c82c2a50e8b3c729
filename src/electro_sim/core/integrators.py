# MIT License (see LICENSE)
"""
Time integrators for the charge system.

All integrators solve
    dx/dt = v,    dv/dt = a(x, v)
where a comes from forces.compute_accelerations(), so the right-hand side
depends on the positions and velocities of every charge at once.

Available integrators:
- euler_step: semi-implicit (symplectic) Euler, one force pass per step.
- rk4_step: classical 4th-order Runge-Kutta, four force passes per step.
- field_euler_step: semi-implicit Euler driven by the field-based force
  pass (no clamping, no magnets).

Mutation contract: each call writes Charge.acceleration for every charge
and Charge.velocity / Charge.position for non-pinned charges only. Arrays
are updated in place, so references held by the caller stay valid.

Damping is applied once per step, to velocity only. None of the integrators
limit dt; the animation driver is expected to clamp it.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
    https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..options import SimulationOptions
from ..types import Charge, Magnet
from .forces import compute_accelerations, compute_field_accelerations


def _advance_euler(charges: Sequence[Charge], dt: float, damping: float) -> None:
    """v += a dt, v *= damping, x += v dt for every free charge."""
    for c in charges:
        if c.pinned:
            continue
        c.velocity += c.acceleration * dt
        c.velocity *= damping
        c.position += c.velocity * dt


def euler_step(
    charges: Sequence[Charge],
    magnets: Sequence[Magnet],
    dt: float,
    options: SimulationOptions,
) -> None:
    """
    Advance all free charges by dt with semi-implicit Euler.

    Velocity is updated first and the new velocity moves the position,
    which keeps orbits bounded far better than explicit Euler at the same
    cost.

    Args:
        charges: Charges to integrate (modified in-place).
        magnets: Field sources.
        dt: Timestep.
        options: Force constants and damping.
    """
    compute_accelerations(charges, magnets, options)
    _advance_euler(charges, dt, options.damping)


def field_euler_step(charges: Sequence[Charge], dt: float, options: SimulationOptions) -> None:
    """Semi-implicit Euler using compute_field_accelerations()."""
    compute_field_accelerations(charges, options)
    _advance_euler(charges, dt, options.damping)


def _derivatives(
    charges: Sequence[Charge],
    magnets: Sequence[Magnet],
    options: SimulationOptions,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Evaluate (dx/dt, dv/dt) for the current state of all charges.

    Returns:
        (velocities, accelerations), each an array [N, 2].
    """
    compute_accelerations(charges, magnets, options)
    dx = np.array([c.velocity for c in charges], dtype=np.float64)
    dv = np.array([c.acceleration for c in charges], dtype=np.float64)
    return dx, dv


def _load_state(charges: Sequence[Charge], x: np.ndarray, v: np.ndarray) -> None:
    """Write stage positions/velocities into the free charges."""
    for i, c in enumerate(charges):
        if c.pinned:
            continue
        c.position[:] = x[i]
        c.velocity[:] = v[i]


def rk4_step(
    charges: Sequence[Charge],
    magnets: Sequence[Magnet],
    dt: float,
    options: SimulationOptions,
) -> None:
    """
    Advance all free charges by dt using classical 4th-order Runge-Kutta.

    Stages are evaluated on the whole system: before each force pass the
    free charges are moved to the stage state, so every stage sees the
    others at the same intermediate point. Pinned charges keep whatever
    position they hold during the stages and are restored to their initial
    position and velocity at the end.

    Final update, with weights (1, 2, 2, 1)/6:
        x = x0 + dt * (k1x + 2 k2x + 2 k3x + k4x) / 6
        v = (v0 + dt * (k1v + 2 k2v + 2 k3v + k4v) / 6) * damping

    Cost: four O(N²) force passes.

    Args:
        charges: Charges to integrate (modified in-place).
        magnets: Field sources.
        dt: Timestep.
        options: Force constants and damping.
    """
    if not charges:
        return

    # Save initial state
    x0 = np.array([c.position for c in charges], dtype=np.float64)
    v0 = np.array([c.velocity for c in charges], dtype=np.float64)

    k1x, k1v = _derivatives(charges, magnets, options)

    _load_state(charges, x0 + 0.5 * dt * k1x, v0 + 0.5 * dt * k1v)
    k2x, k2v = _derivatives(charges, magnets, options)

    _load_state(charges, x0 + 0.5 * dt * k2x, v0 + 0.5 * dt * k2v)
    k3x, k3v = _derivatives(charges, magnets, options)

    _load_state(charges, x0 + dt * k3x, v0 + dt * k3v)
    k4x, k4v = _derivatives(charges, magnets, options)

    # Weighted combination
    dxdt = (k1x + 2 * k2x + 2 * k3x + k4x) / 6.0
    dvdt = (k1v + 2 * k2v + 2 * k3v + k4v) / 6.0
    x1 = x0 + dt * dxdt
    v1 = (v0 + dt * dvdt) * options.damping

    for i, c in enumerate(charges):
        if c.pinned:
            c.position[:] = x0[i]
            c.velocity[:] = v0[i]
        else:
            c.position[:] = x1[i]
            c.velocity[:] = v1[i]
