# MIT License (see LICENSE)
"""
Single entry point for advancing the charge system.

The stepper only dispatches: it resolves options, picks an integrator and
runs one step. It never clamps dt and caches nothing between calls; the
caller owns the charge and magnet lists and hands them in each frame.

    step_physics(charges, magnets, dt, options)       # semi-implicit Euler
    step_physics_rk4(charges, magnets, dt, options)   # RK4
    step(charges, magnets, dt, options, integrator="rk4")

options may be a SimulationOptions, a flat mapping such as
{"k": 1, "softening": 0.1, "damping": 1.0, "maxAccel": 2000}, or None.
"""
from __future__ import annotations
from typing import Any, Mapping, Sequence

import numpy as np

from .core.fields import electric_field_at
from .core.integrators import euler_step, rk4_step, field_euler_step
from .options import SimulationOptions, resolve_options
from .types import Charge, Magnet

OptionsLike = SimulationOptions | Mapping[str, Any] | None

# "fields" is the field-based Euler variant; it ignores magnets.
INTEGRATORS: tuple[str, ...] = ("euler", "rk4", "fields")


def check_integrator(name: str) -> str:
    """Return name if it is a known integrator, else raise ValueError."""
    if name not in INTEGRATORS:
        raise ValueError(f"Unknown integrator: {name!r} (expected one of {', '.join(INTEGRATORS)})")
    return name


def step(
    charges: Sequence[Charge],
    magnets: Sequence[Magnet],
    dt: float,
    options: OptionsLike = None,
    integrator: str = "euler",
) -> None:
    """
    Advance the system by one step of size dt.

    Args:
        charges: Charges to integrate (modified in-place).
        magnets: Field sources (never modified).
        dt: Timestep. Used as given.
        options: Force constants, damping and clamp.
        integrator: "euler", "rk4" or "fields".

    Raises:
        ValueError: If the integrator name is unknown or options are invalid.
    """
    opts = resolve_options(options)
    if integrator == "euler":
        euler_step(charges, magnets, dt, opts)
    elif integrator == "rk4":
        rk4_step(charges, magnets, dt, opts)
    elif integrator == "fields":
        field_euler_step(charges, dt, opts)
    else:
        raise ValueError(f"Unknown integrator: {integrator!r} (expected one of {', '.join(INTEGRATORS)})")


def step_physics(charges: Sequence[Charge], magnets: Sequence[Magnet], dt: float, options: OptionsLike = None) -> None:
    """Semi-implicit Euler step. See core.integrators.euler_step."""
    step(charges, magnets, dt, options, integrator="euler")


def step_physics_rk4(charges: Sequence[Charge], magnets: Sequence[Magnet], dt: float, options: OptionsLike = None) -> None:
    """RK4 step. See core.integrators.rk4_step."""
    step(charges, magnets, dt, options, integrator="rk4")


def electric_field(point, charges: Sequence[Charge], options: OptionsLike = None) -> np.ndarray:
    """
    Electric field at a point, using k and softening from options.

    Shares the defaults of the stepping functions, so the field a renderer
    draws is the one pushing the charges.
    """
    opts = resolve_options(options)
    return electric_field_at(point, charges, opts.k, opts.softening)
