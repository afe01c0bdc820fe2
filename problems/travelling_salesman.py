"""Travelling salesman on a circle.

Reference problem for the annealing engine: N points evenly spaced on a circle,
each tagged with its index. The shortest closed tour visits them in tag order
(either direction), which makes the result trivial to verify.

Moves swap two random positions of the tour; energy is the tour perimeter; the
schedule is `100 * e^(-12 * progress) * energy`.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import logging
import math
import random

from annealing import Anneal
from annealing.schedules import TemperatureFn, energy_scaled_exponential


logger = logging.getLogger(__name__)


# ----------------------------
# State representation
# ----------------------------


@dataclass(frozen=True)
class Position:
    x: float
    y: float
    tag: int


@dataclass(frozen=True)
class TourState:
    """Visiting order of all positions; the tour closes back to the first one."""

    order: Tuple[Position, ...]


def circle_positions(num_points: int, radius: float = 100.0) -> List[Position]:
    if num_points < 3:
        raise ValueError("num_points must be >= 3")

    positions = []
    for i in range(num_points):
        angle = 2.0 * math.pi * i / num_points
        positions.append(Position(x=radius * math.cos(angle), y=radius * math.sin(angle), tag=i))
    return positions


def shuffled_tour(positions: Sequence[Position], rng: random.Random) -> TourState:
    order = list(positions)
    rng.shuffle(order)
    return TourState(order=tuple(order))


def tour_length(state: TourState) -> float:
    order = state.order
    n = len(order)
    total = 0.0
    for i in range(n):
        a = order[i]
        b = order[(i + 1) % n]
        total += math.hypot(a.x - b.x, a.y - b.y)
    return total


def optimal_circle_length(num_points: int, radius: float = 100.0) -> float:
    # N equal chords
    return num_points * 2.0 * radius * math.sin(math.pi / num_points)


def is_circle_order(state: TourState) -> bool:
    """True if every pair of consecutive tags differs by +/-1 modulo N."""

    n = len(state.order)
    for i in range(n):
        t1 = state.order[i].tag
        t2 = state.order[(i + 1) % n].tag
        if (t1 + 1) % n != t2 and (t1 - 1) % n != t2:
            logger.debug("tour breaks circle order at %d:%d", t1, t2)
            return False
    return True


def tour_as_rows(state: TourState) -> List[Dict[str, object]]:
    rows: List[Dict[str, object]] = []
    for i, p in enumerate(state.order):
        rows.append({"Stop": i + 1, "Tag": p.tag, "X": round(p.x, 3), "Y": round(p.y, 3)})
    return rows


# -------------------------------------------------
# Annealer
# -------------------------------------------------


class TravellingSalesman(Anneal[TourState]):
    def __init__(
        self,
        seed: Optional[int] = None,
        schedule: Optional[TemperatureFn] = None,
    ) -> None:
        self.rng = random.Random(seed)
        self.schedule = schedule if schedule is not None else energy_scaled_exponential(100.0, 12.0)

    def random(self) -> float:
        return self.rng.random()

    def temperature(self, progress: float, energy: float) -> float:
        return self.schedule(progress, energy)

    def energy(self, state: TourState) -> float:
        return tour_length(state)

    def neighbour(self, state: TourState) -> TourState:
        n = len(state.order)
        i = self.rng.randrange(n)
        j = self.rng.randrange(n)

        order = list(state.order)
        order[i], order[j] = order[j], order[i]
        return TourState(order=tuple(order))


# -------------------------------------------------
# Solve
# -------------------------------------------------


def solve_circle_tour(
    num_points: int = 10,
    num_iterations: int = 1_000,
    seed: Optional[int] = None,
    radius: float = 100.0,
) -> Tuple[TourState, Dict[str, float]]:
    """Shuffle the circle, anneal it and check the result.

    Returns:
        (final_state, metrics)
    """

    rng = random.Random(seed)
    initial = shuffled_tour(circle_positions(num_points, radius), rng)

    # Annealer gets its own stream so the shuffle does not shift its draws.
    salesman = TravellingSalesman(seed=rng.randrange(2**32))

    logger.debug("annealing %d points for %d iterations (seed=%s)", num_points, num_iterations, seed)
    final = salesman.optimise(num_iterations, initial)

    metrics = {
        "initial_length": tour_length(initial),
        "final_length": tour_length(final),
        "optimal_length": optimal_circle_length(num_points, radius),
        "is_optimal": float(is_circle_order(final)),
    }
    logger.debug("final length %.3f (optimal %.3f)", metrics["final_length"], metrics["optimal_length"])
    return final, metrics
