# MIT License (see LICENSE)
"""
Per-step configuration for the simulation kernel.

SimulationOptions is a small immutable record. The stepping functions also
accept a flat mapping (e.g. a dict decoded from a UI form) or None, which
resolve_options() turns into a SimulationOptions:

    {"k": 10000, "softening": 0.4, "damping": 0.999, "maxAccel": 2000}

Recognized keys are k, softening, damping and maxAccel (max_accel is
accepted as well). Unknown keys are ignored and missing keys take the
defaults from constants.py.
"""
from __future__ import annotations
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .constants import DEFAULT_K, DEFAULT_SOFTENING, DEFAULT_DAMPING, DEFAULT_MAX_ACCEL

logger = logging.getLogger(__name__)

# Damping values already reported; mappings are resolved on every step call.
_warned_damping: set[str] = set()


@dataclass(frozen=True)
class SimulationOptions:
    """
    Physical constants and stability knobs for one step.

    Attributes:
        k: Electrostatic constant.
        softening: Length ε added in quadrature to every distance
                   (r² -> r² + ε²). Must be >= 0.
        damping: Velocity multiplier applied once per step. Expected in
                 (0, 1]; 1.0 disables damping.
        max_accel: Magnitude cap on each pairwise electrostatic acceleration
                   contribution. Use float("inf") to disable clamping; 0 switches
                   electrostatic forces off.

    Raises:
        ValueError: If softening or max_accel is negative (or NaN).
    """
    k: float = DEFAULT_K
    softening: float = DEFAULT_SOFTENING
    damping: float = DEFAULT_DAMPING
    max_accel: float = DEFAULT_MAX_ACCEL

    def __post_init__(self) -> None:
        if not self.softening >= 0.0:
            raise ValueError(f"softening must be >= 0, got {self.softening}")
        if not self.max_accel >= 0.0:
            raise ValueError(f"max_accel must be >= 0, got {self.max_accel}")
        if not 0.0 < self.damping <= 1.0 and repr(self.damping) not in _warned_damping:
            _warned_damping.add(repr(self.damping))
            logger.warning("damping=%r is outside (0, 1]; motion may gain energy or reverse", self.damping)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationOptions":
        """
        Build options from a flat mapping, ignoring unrecognized keys.

        A key whose value is None counts as missing.
        """
        def get(default: float, *keys: str) -> float:
            for key in keys:
                value = data.get(key)
                if value is not None:
                    return float(value)
            return default

        return cls(
            k=get(DEFAULT_K, "k"),
            softening=get(DEFAULT_SOFTENING, "softening"),
            damping=get(DEFAULT_DAMPING, "damping"),
            max_accel=get(DEFAULT_MAX_ACCEL, "maxAccel", "max_accel"),
        )

    @classmethod
    def interactive(cls) -> "SimulationOptions":
        """
        Settings tuned for the interactive canvas (pixel units, 60 fps).

        k is raised so that accelerations are visible at pixel distances;
        lower it if charges start flying apart.
        """
        return cls(k=10000.0, softening=0.4, damping=0.999, max_accel=2000.0)

    def replace(self, **changes: Any) -> "SimulationOptions":
        """Return a copy with the given fields changed (validated again)."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, float]:
        """Flat mapping using the same keys from_mapping() reads."""
        return {
            "k": self.k,
            "softening": self.softening,
            "damping": self.damping,
            "maxAccel": self.max_accel,
        }


def resolve_options(options: SimulationOptions | Mapping[str, Any] | None) -> SimulationOptions:
    """Normalize None / mapping / SimulationOptions into SimulationOptions."""
    if options is None:
        return SimulationOptions()
    if isinstance(options, SimulationOptions):
        return options
    return SimulationOptions.from_mapping(options)
