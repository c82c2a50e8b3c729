# MIT License (see LICENSE)
"""
Entities of the simulation: point charges and bar magnets.

Both are plain mutable dataclasses. Callers own the lists that hold them and
pass those lists into the stepping functions, which mutate the entities in
place:

  - Charge.acceleration is overwritten by every force evaluation.
  - Charge.velocity and Charge.position are advanced by the integrators,
    except while the charge is pinned.
  - Magnets are never moved by the simulation.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64


@dataclass
class Charge:
    """
    A point charge moving in the plane.

    Attributes:
        q: Signed charge.
        mass: Inertial mass. Must be > 0; the kernel divides by it unchecked.
        position: Position [x, y].
        velocity: Velocity [vx, vy], zero for a freshly placed charge.
        pinned: True while something outside the simulation holds the
                charge (e.g. a mouse drag). Integrators leave pinned charges
                where they are.
        acceleration: Last computed acceleration [ax, ay]. Runtime state,
                      rewritten on every force evaluation.
    """
    q: float
    mass: float = 1.0
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    pinned: bool = False
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.acceleration = f64(self.acceleration)

    @property
    def inv_mass(self) -> float:
        return 1.0 / self.mass


@dataclass
class Magnet:
    """
    A bar magnet modelled as an ideal point dipole.

    Attributes:
        position: Dipole centre [x, y].
        angle: Orientation in radians, counterclockwise from +x.
        strength: Dipole moment magnitude (sign flips the poles).
        pinned: Set while the magnet is being dragged. Magnets are never
                moved by forces, so this only matters to the caller.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    angle: float = 0.0
    strength: float = 10.0
    pinned: bool = False

    def __post_init__(self) -> None:
        self.position = f64(self.position)

    @property
    def moment(self) -> np.ndarray:
        """Dipole moment vector strength * (cos θ, sin θ)."""
        return np.array(
            [self.strength * np.cos(self.angle), self.strength * np.sin(self.angle)],
            dtype=np.float64,
        )
