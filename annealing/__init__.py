"""Problem-agnostic simulated annealing engine."""

from .core import Anneal, AnnealResult, StepCallback, metropolis
from .functional import AnnealConfig, FunctionAnnealer, anneal
from .schedules import TemperatureFn, constant, energy_scaled_exponential, geometric

__all__ = [
    "Anneal",
    "AnnealConfig",
    "AnnealResult",
    "FunctionAnnealer",
    "StepCallback",
    "TemperatureFn",
    "anneal",
    "constant",
    "energy_scaled_exponential",
    "geometric",
    "metropolis",
]
