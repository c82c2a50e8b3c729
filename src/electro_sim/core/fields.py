# MIT License (see LICENSE)
"""
Field evaluation: electric field of point charges and magnetic field of
point dipoles.

Every distance is softened: r² -> r² + ε². With ε > 0 the fields stay
finite everywhere; with ε = 0 a query exactly on top of a charge (or
magnet) returns a non-finite value, which is left to the caller.

These functions are pure. Force accumulation in forces.py uses the same
formulas, so a renderer that draws electric_field_at() sees exactly the
field that drives the charges.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..constants import DEFAULT_K, DEFAULT_SOFTENING
from ..types import Charge, Magnet
from ..util import f64, norm2, norm


def electric_field_at(
    point,
    charges: Sequence[Charge],
    k: float = DEFAULT_K,
    softening: float = DEFAULT_SOFTENING,
) -> np.ndarray:
    """
    Electric field at a point from a set of charges.

    Implements E = Σ k q_c Δ / (|Δ|² + ε²)^(3/2) with Δ = point - c.position.

    No charge is excluded: if the point sits on a charge, that charge
    contributes too (zero when ε > 0, since Δ = 0).

    Args:
        point: Query position [x, y].
        charges: Charges to sum over.
        k: Electrostatic constant.
        softening: Softening length ε.

    Returns:
        Field vector [Ex, Ey].
    """
    p = f64(point)
    eps2 = softening * softening
    E = np.zeros(2, dtype=np.float64)
    for c in charges:
        d = p - c.position
        r2 = norm2(d) + eps2
        inv_r3 = 1.0 / (np.sqrt(r2) * r2)
        E += (k * c.q * inv_r3) * d
    return E


def magnetic_field_at(point, magnet: Magnet, softening: float = DEFAULT_SOFTENING) -> np.ndarray:
    """
    Field of an ideal point dipole, in the plane.

    With m = strength (cos θ, sin θ), Δ = point - magnet.position and
    r² = |Δ|² + ε²:

        B = 3 (m·Δ) Δ / r⁵ - m / r³

    Returns:
        Field vector [Bx, By].
    """
    d = f64(point) - magnet.position
    r2 = norm2(d) + softening * softening
    r = np.sqrt(r2)
    m = magnet.moment
    dot = float(m[0] * d[0] + m[1] * d[1])
    r3 = r2 * r
    r5 = r2 * r2 * r
    return (3.0 * dot / r5) * d - m / r3


def total_magnetic_field_at(
    point,
    magnets: Sequence[Magnet],
    softening: float = DEFAULT_SOFTENING,
) -> np.ndarray:
    """Superposition of magnetic_field_at() over all magnets. Zero if there are none."""
    B = np.zeros(2, dtype=np.float64)
    for mag in magnets:
        B += magnetic_field_at(point, mag, softening)
    return B


def field_glyphs(
    width: float,
    height: float,
    charges: Sequence[Charge],
    spacing: float = 32.0,
    k: float = DEFAULT_K,
    softening: float = DEFAULT_SOFTENING,
    scale: float = 20.0,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Sample the electric field on a regular grid for drawing arrows.

    Grid points are cell centres (spacing/2, 3*spacing/2, ...) inside
    [0, width) x [0, height). Each arrow points along E with length
    min(|E| * scale, 0.9 * spacing), so strong fields don't overlap
    neighbouring cells. Cells with exactly zero field get a zero vector.

    Returns:
        (points, vectors): two float64 arrays of shape [N, 2].
    """
    xs = np.arange(spacing / 2, width, spacing)
    ys = np.arange(spacing / 2, height, spacing)
    max_len = 0.9 * spacing

    points = np.zeros((len(xs) * len(ys), 2), dtype=np.float64)
    vectors = np.zeros_like(points)
    idx = 0
    for y in ys:
        for x in xs:
            points[idx] = (x, y)
            E = electric_field_at(points[idx], charges, k, softening)
            mag = norm(E)
            if mag > 0.0:
                vectors[idx] = (E / mag) * min(mag * scale, max_len)
            idx += 1
    return points, vectors
