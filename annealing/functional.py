"""Function-based front end to the annealing core.

Handy when a problem is just a pair of callables and writing an `Anneal`
subclass would be ceremony.

    result = anneal(
        initial_state=50,
        neighbour=lambda x, rng: x + rng.choice((-1, 1)),
        energy=lambda x: float((x - 3) ** 2),
        config=AnnealConfig(steps=2000, seed=1, schedule=geometric(5.0, 0.01)),
    )

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

import random

from .core import Anneal, AnnealResult, StepCallback, TState
from .schedules import TemperatureFn, energy_scaled_exponential


class NeighbourFn(Protocol[TState]):
    def __call__(self, state: TState, rng: random.Random) -> TState:  # pragma: no cover
        """Return a randomly sampled neighbour of `state`."""


class EnergyFn(Protocol[TState]):
    def __call__(self, state: TState) -> float:  # pragma: no cover
        """Return energy/cost to MINIMIZE."""


@dataclass(frozen=True)
class AnnealConfig:
    """Run configuration.

    Attributes:
        steps: Total number of iterations.
        seed: RNG seed for reproducibility (None draws from OS entropy).
        schedule: Cooling schedule, see `annealing.schedules`.
    """

    steps: int = 1_000
    seed: Optional[int] = 42
    schedule: TemperatureFn = field(default_factory=energy_scaled_exponential)


class FunctionAnnealer(Anneal[TState]):
    """Adapts plain callables to the `Anneal` contract.

    The annealer owns one `random.Random`; the neighbour callable receives
    the same generator so a single seed fixes the whole run.
    """

    def __init__(
        self,
        neighbour: NeighbourFn[TState],
        energy: EnergyFn[TState],
        schedule: TemperatureFn,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._neighbour = neighbour
        self._energy = energy
        self._schedule = schedule
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def from_config(
        cls,
        neighbour: NeighbourFn[TState],
        energy: EnergyFn[TState],
        config: AnnealConfig,
    ) -> "FunctionAnnealer[TState]":
        return cls(neighbour, energy, config.schedule, rng=random.Random(config.seed))

    def random(self) -> float:
        return self.rng.random()

    def temperature(self, progress: float, energy: float) -> float:
        return self._schedule(progress, energy)

    def energy(self, state: TState) -> float:
        return self._energy(state)

    def neighbour(self, state: TState) -> TState:
        return self._neighbour(state, self.rng)


def anneal(
    initial_state: TState,
    neighbour: NeighbourFn[TState],
    energy: EnergyFn[TState],
    config: AnnealConfig = AnnealConfig(),
    callback: Optional[StepCallback[TState]] = None,
) -> AnnealResult[TState]:
    """Run simulated annealing over plain callables.

    Returns:
        AnnealResult with the final state, the best state seen and counters.
    """

    annealer = FunctionAnnealer.from_config(neighbour, energy, config)
    return annealer.optimise_best(config.steps, initial_state, callback=callback)
