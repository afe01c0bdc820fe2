"""Generic simulated annealing core.

The engine knows nothing about the problem it optimizes. A concrete problem
subclasses `Anneal` and supplies four capabilities:

- `random()`      next uniform value in [0, 1)
- `temperature()` cooling schedule, from run progress and the current energy
- `energy()`      cost of a state (lower is better)
- `neighbour()`   a perturbed copy of a state

`accept_probability()` has a default (Metropolis criterion) that subclasses may
override. The loop only ever goes through these methods.

Two entry points exist:
1) `optimise()` returns the last state reached (the classic contract)
2) `optimise_best()` runs the same loop but also reports the best state seen

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, Protocol, TypeVar

import math
import operator


TState = TypeVar("TState")


class StepCallback(Protocol[TState]):
    def __call__(
        self,
        step: int,
        progress: float,
        temperature: float,
        current_state: TState,
        current_energy: float,
        candidate_energy: float,
        acceptance: float,
        accepted: bool,
    ) -> None:  # pragma: no cover
        """Optional observer called once per iteration, after the acceptance decision."""


@dataclass
class AnnealResult(Generic[TState]):
    final_state: TState
    final_energy: float
    best_state: TState
    best_energy: float
    best_step: int
    accepted_moves: int
    total_steps: int


def metropolis(energy_current: float, energy_neighbour: float, temperature: float) -> float:
    """Metropolis acceptance probability.

    Improvements are always accepted. A worsening move is accepted with
    probability exp(-ΔE/T).

    A non-positive temperature never accepts a worsening move (probability 0)
    instead of dividing by zero; an equal-energy move still gets 1.0.
    """

    if energy_neighbour < energy_current:
        return 1.0

    delta = energy_neighbour - energy_current
    if temperature <= 0:
        return 1.0 if delta == 0 else 0.0

    return math.exp(-delta / temperature)


def _check_iterations(num_iterations: int) -> int:
    if isinstance(num_iterations, bool):
        raise TypeError("num_iterations must be an int, got bool")
    try:
        num_iterations = operator.index(num_iterations)
    except TypeError:
        raise TypeError(f"num_iterations must be an int, got {type(num_iterations).__name__}") from None
    if num_iterations < 0:
        raise ValueError("num_iterations must be >= 0")
    return num_iterations


class Anneal(ABC, Generic[TState]):
    """Capability contract plus the annealing loop.

    Implementations own their random source and any mutable search-space data.
    Nothing here is thread-safe; one run belongs to one caller.
    """

    @abstractmethod
    def random(self) -> float:
        """Return the next uniform value in [0, 1)."""

    @abstractmethod
    def temperature(self, progress: float, energy: float) -> float:
        """Return the temperature for `progress` in (0, 1] given the current energy."""

    @abstractmethod
    def energy(self, state: TState) -> float:
        """Return the energy of `state`. Must be deterministic per state."""

    @abstractmethod
    def neighbour(self, state: TState) -> TState:
        """Return a candidate derived from `state` without mutating it."""

    def accept_probability(self, energy_current: float, energy_neighbour: float, temperature: float) -> float:
        return metropolis(energy_current, energy_neighbour, temperature)

    def optimise(
        self,
        num_iterations: int,
        initial_state: TState,
        callback: Optional[StepCallback[TState]] = None,
    ) -> TState:
        """Run `num_iterations` annealing steps and return the last state reached.

        Zero iterations hands `initial_state` straight back without touching
        any capability.
        """

        num_iterations = _check_iterations(num_iterations)
        if num_iterations == 0:
            return initial_state
        return self._run(num_iterations, initial_state, callback).final_state

    def optimise_best(
        self,
        num_iterations: int,
        initial_state: TState,
        callback: Optional[StepCallback[TState]] = None,
    ) -> AnnealResult[TState]:
        """Same loop as `optimise`, but also report the best state seen.

        The random draws are identical to `optimise`, so for a given random
        source `result.final_state` matches what `optimise` would return.
        """

        return self._run(_check_iterations(num_iterations), initial_state, callback)

    def _run(
        self,
        num_iterations: int,
        initial_state: TState,
        callback: Optional[StepCallback[TState]],
    ) -> AnnealResult[TState]:
        current = initial_state
        current_e = self.energy(current)

        best = current
        best_e = current_e
        best_step = 0
        accepted_moves = 0

        for step in range(num_iterations):
            progress = (step + 1) / num_iterations
            t = self.temperature(progress, current_e)
            cand = self.neighbour(current)
            cand_e = self.energy(cand)

            p = self.accept_probability(current_e, cand_e, t)
            r = self.random()
            if not 0.0 <= r < 1.0:
                raise ValueError(f"random() must return a value in [0, 1), got {r!r}")

            accepted = p >= r
            if accepted:
                current = cand
                current_e = cand_e
                accepted_moves += 1

                if current_e < best_e:
                    best = current
                    best_e = current_e
                    best_step = step + 1

            if callback is not None:
                callback(
                    step=step,
                    progress=progress,
                    temperature=t,
                    current_state=current,
                    current_energy=current_e,
                    candidate_energy=cand_e,
                    acceptance=p,
                    accepted=accepted,
                )

        return AnnealResult(
            final_state=current,
            final_energy=current_e,
            best_state=best,
            best_energy=best_e,
            best_step=best_step,
            accepted_moves=accepted_moves,
            total_steps=num_iterations,
        )
