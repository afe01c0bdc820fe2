"""Cooling schedules.

A schedule maps run progress (0, 1] and the current energy to a temperature.
All schedules here are fixed functions; none of them adapts to acceptance
statistics.
"""

from __future__ import annotations

from typing import Protocol

import math


class TemperatureFn(Protocol):
    def __call__(self, progress: float, energy: float) -> float:  # pragma: no cover
        """Return the temperature at `progress` for an incumbent of `energy`."""


def energy_scaled_exponential(scale: float = 100.0, decay: float = 12.0) -> TemperatureFn:
    """T = scale * e^(-decay * progress) * energy."""

    def schedule(progress: float, energy: float) -> float:
        return scale * math.exp(-decay * progress) * energy

    return schedule


def geometric(t_start: float, t_end: float) -> TemperatureFn:
    """Geometric cooling from `t_start` towards `t_end` (reached at progress 1)."""

    if t_start <= 0 or t_end <= 0:
        raise ValueError("t_start and t_end must be > 0")

    def schedule(progress: float, energy: float) -> float:
        # T = T_start * (T_end/T_start)^progress
        return t_start * ((t_end / t_start) ** progress)

    return schedule


def constant(value: float) -> TemperatureFn:
    def schedule(progress: float, energy: float) -> float:
        return value

    return schedule
