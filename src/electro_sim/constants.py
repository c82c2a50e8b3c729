# MIT License (see LICENSE)
"""
Default parameters for the electrostatic/magnetic simulation.

The simulation works in dimensionless "canvas" units: positions in pixels,
time in seconds of animation, charge and mass as plain numbers. These are
the values used when a caller does not override them via SimulationOptions.
"""
from __future__ import annotations

# Electrostatic constant k in F = k * q1 * q2 / r².
DEFAULT_K: float = 1.0

# Softening length ε. Squared distances become r² + ε² so the field stays
# finite when two charges overlap.
DEFAULT_SOFTENING: float = 0.1

# Velocity multiplier applied after each integration step (1.0 = no damping).
DEFAULT_DAMPING: float = 1.0

# Upper bound on the magnitude of each pairwise acceleration contribution.
DEFAULT_MAX_ACCEL: float = 2000.0

# Largest frame interval the animation driver hands to the integrators.
# Wall-clock frames longer than this are clamped to keep the system stable.
MAX_FRAME_DT: float = 0.03

# Hit-test radii for picking entities with the mouse.
CHARGE_MIN_RADIUS: float = 6.0
CHARGE_MAX_RADIUS: float = 20.0
CHARGE_RADIUS_PER_Q: float = 4.0
MAGNET_SIZE: tuple[float, float] = (40.0, 20.0)
PICK_MARGIN: float = 6.0
