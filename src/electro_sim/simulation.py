# MIT License (see LICENSE)
"""
Simulation driver for an interactive charge/magnet playground.

The Simulation class is what an animation loop talks to. It owns the charge
and magnet lists, the options and the chosen integrator, and it does the
two jobs the kernel deliberately leaves to its caller:

- clamping wall-clock frame intervals (advance) before stepping, and
- pinning entities while they are dragged (grab / drag_to / release).

Structure:
    sim = Simulation(options=SimulationOptions.interactive())
    sim.add_charge(Charge(q=1, position=(400, 300)))
    sim.add_magnet(Magnet(position=(200, 300), strength=10000))
    while running:
        sim.advance(elapsed_seconds)
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import numpy as np

from .constants import (
    MAX_FRAME_DT,
    CHARGE_MIN_RADIUS,
    CHARGE_MAX_RADIUS,
    CHARGE_RADIUS_PER_Q,
    MAGNET_SIZE,
    PICK_MARGIN,
)
from .core.fields import field_glyphs
from .core.invariants import total_energy
from .options import SimulationOptions, resolve_options
from .profiler import Profiler
from .stepper import step, check_integrator
from .types import Charge, Magnet
from .util import f64, norm2

logger = logging.getLogger(__name__)

Entity = Charge | Magnet


def charge_radius(charge: Charge) -> float:
    """Display/pick radius of a charge: 4 |q| clipped to [6, 20]."""
    return max(CHARGE_MIN_RADIUS, min(CHARGE_MAX_RADIUS, abs(charge.q) * CHARGE_RADIUS_PER_Q))


@dataclass
class Simulation:
    """
    Charge/magnet world plus its stepping policy.

    Attributes:
        options: Kernel options used for every step. A flat mapping is
                 converted to SimulationOptions on construction.
        integrator: "euler", "rk4" or "fields".
        max_frame_dt: Upper bound applied by advance() to frame intervals.
        profiler: Optional Profiler; step() is timed as section "step".
        charges: Charges in insertion order.
        magnets: Magnets in insertion order.
        time: Accumulated simulated time.

    Raises:
        ValueError: If the integrator is unknown or max_frame_dt <= 0.
    """
    options: SimulationOptions | Mapping[str, Any] = field(default_factory=SimulationOptions)
    integrator: str = "euler"
    max_frame_dt: float = MAX_FRAME_DT
    profiler: Profiler | None = None

    charges: list[Charge] = field(default_factory=list)
    magnets: list[Magnet] = field(default_factory=list)
    time: float = 0.0

    def __post_init__(self) -> None:
        self.options = resolve_options(self.options)
        check_integrator(self.integrator)
        if not self.max_frame_dt > 0:
            raise ValueError(f"max_frame_dt must be positive, got {self.max_frame_dt}")
        self._grabbed: Entity | None = None

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def add_charge(self, charge: Charge) -> Charge:
        """
        Append a charge to the world.

        Raises:
            ValueError: If charge.mass <= 0 (the kernel divides by mass).
        """
        if not charge.mass > 0:
            raise ValueError(f"Charge mass must be positive, got {charge.mass}")
        self.charges.append(charge)
        logger.debug("Added charge q=%g m=%g at (%.2f, %.2f)", charge.q, charge.mass, *charge.position)
        return charge

    def add_magnet(self, magnet: Magnet) -> Magnet:
        """Append a magnet to the world."""
        self.magnets.append(magnet)
        logger.debug("Added magnet strength=%g angle=%.3f at (%.2f, %.2f)", magnet.strength, magnet.angle, *magnet.position)
        return magnet

    def remove_charge(self, charge: Charge | None = None) -> Charge | None:
        """Remove the given charge, or the most recently added one. Returns it (None if empty)."""
        removed = self._remove(self.charges, charge)
        if removed is not None:
            logger.debug("Removed charge q=%g", removed.q)
        return removed

    def remove_magnet(self, magnet: Magnet | None = None) -> Magnet | None:
        """Remove the given magnet, or the most recently added one. Returns it (None if empty)."""
        removed = self._remove(self.magnets, magnet)
        if removed is not None:
            logger.debug("Removed magnet strength=%g", removed.strength)
        return removed

    def _remove(self, items: list, item):
        if item is None:
            if not items:
                return None
            item = items.pop()
        else:
            # identity, not dataclass equality
            for idx, x in enumerate(items):
                if x is item:
                    del items[idx]
                    break
            else:
                raise ValueError(f"{type(item).__name__} is not part of this simulation")
        if item is self._grabbed:
            self._grabbed = None
        return item

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def use_integrator(self, name: str) -> None:
        """Switch integration scheme ("euler", "rk4" or "fields")."""
        self.integrator = check_integrator(name)
        logger.info("Integrator set to %s", name)

    def step(self, dt: float | None = None) -> None:
        """
        Integrate exactly dt (default: max_frame_dt). No clamping.
        """
        dt = float(self.max_frame_dt if dt is None else dt)
        if self.profiler:
            with self.profiler.section("step"):
                step(self.charges, self.magnets, dt, self.options, self.integrator)
        else:
            step(self.charges, self.magnets, dt, self.options, self.integrator)
        self.time += dt

    def advance(self, elapsed: float) -> float:
        """
        Step by a wall-clock interval, clamped to [0, max_frame_dt].

        Long frames (tab switches, breakpoints) would otherwise produce a
        huge dt and blow the system apart.

        Returns:
            The dt actually integrated.
        """
        dt = min(self.max_frame_dt, max(0.0, float(elapsed)))
        if elapsed > self.max_frame_dt:
            logger.debug("Frame interval %.4f clamped to %.4f", elapsed, dt)
        self.step(dt)
        return dt

    # ------------------------------------------------------------------
    # Picking and dragging
    # ------------------------------------------------------------------

    def query_point(self, point: tuple[float, float]) -> Entity | None:
        """
        Find the entity nearest to a point within its pick radius.

        Charges are hit within charge_radius() + 6, magnets within half
        their longer side + 6. A magnet is chosen over a charge only when it
        is strictly nearer.

        Returns:
            The picked Charge or Magnet, or None.
        """
        p = f64(point)
        best = None
        best_d2 = np.inf
        for c in self.charges:
            reach = charge_radius(c) + PICK_MARGIN
            d2 = norm2(c.position - p)
            if d2 < reach * reach and d2 < best_d2:
                best, best_d2 = c, d2

        reach = max(MAGNET_SIZE) / 2 + PICK_MARGIN
        for m in self.magnets:
            d2 = norm2(m.position - p)
            if d2 < reach * reach and d2 < best_d2:
                best, best_d2 = m, d2
        return best

    @property
    def grabbed(self) -> Entity | None:
        """Entity currently held by grab(), if any."""
        return self._grabbed

    def grab(self, point: tuple[float, float]) -> Entity | None:
        """
        Pin the entity under the point so the integrators leave it alone.

        A grabbed charge also loses its velocity, so it does not fly off
        with stale momentum when released.
        """
        self.release()
        target = self.query_point(point)
        if target is None:
            return None
        target.pinned = True
        if isinstance(target, Charge):
            target.velocity[:] = 0.0
        self._grabbed = target
        logger.debug("Grabbed %s at (%.2f, %.2f)", type(target).__name__, *target.position)
        return target

    def drag_to(self, point: tuple[float, float]) -> None:
        """Move the grabbed entity to point. No-op when nothing is grabbed."""
        if self._grabbed is not None:
            self._grabbed.position[:] = f64(point)

    def release(self) -> None:
        """Unpin the grabbed entity, if any."""
        if self._grabbed is not None:
            self._grabbed.pinned = False
            logger.debug("Released %s", type(self._grabbed).__name__)
            self._grabbed = None

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def energy(self) -> float:
        """Kinetic plus softened Coulomb potential energy of all charges."""
        return total_energy(self.charges, self.options)

    def field_glyphs(
        self,
        width: float,
        height: float,
        spacing: float = 32.0,
        scale: float = 20.0,
        options: SimulationOptions | Mapping[str, Any] | None = None,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Electric field arrows over a width x height canvas.

        Uses k and softening from options if given, else from self.options.
        See core.fields.field_glyphs.
        """
        opts = self.options if options is None else resolve_options(options)
        return field_glyphs(width, height, self.charges, spacing, opts.k, opts.softening, scale)
