import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure project root is on PYTHONPATH when tests are run via `pytest`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from annealing import Anneal
from problems.travelling_salesman import TravellingSalesman, circle_positions, shuffled_tour
from annealing.schedules import constant
from utils.trace_export import TraceRecorder


class Untouchable(Anneal[int]):
    def random(self) -> float:
        raise AssertionError("random() called")

    def temperature(self, progress: float, energy: float) -> float:
        raise AssertionError("temperature() called")

    def energy(self, state: int) -> float:
        raise AssertionError("energy() called")

    def neighbour(self, state: int) -> int:
        raise AssertionError("neighbour() called")


class Walk(Anneal[int]):
    """Integer walk driven by scripted random values; logs every capability call."""

    def __init__(self, draws, temperature=1.0):
        self.draws = list(draws)
        self.t = temperature
        self.calls = []

    def random(self) -> float:
        self.calls.append("random")
        return self.draws.pop(0)

    def temperature(self, progress: float, energy: float) -> float:
        self.calls.append(("temperature", progress, energy))
        return self.t

    def energy(self, state: int) -> float:
        self.calls.append("energy")
        return float(state)

    def neighbour(self, state: int) -> int:
        self.calls.append("neighbour")
        return state + 1


def test_zero_iterations_returns_initial_state_untouched():
    state = ["any", "object"]
    assert Untouchable().optimise(0, state) is state


def test_numpy_integer_iteration_count_is_accepted():
    initial = _initial_tour(11)
    expected = TravellingSalesman(seed=1).optimise(100, initial)
    result = TravellingSalesman(seed=1).optimise(np.int64(100), initial)
    assert [p.tag for p in result.order] == [p.tag for p in expected.order]

    best = TravellingSalesman(seed=1).optimise_best(np.int32(100), initial)
    assert best.total_steps == 100
    assert type(best.total_steps) is int

    state = ["untouched"]
    assert Untouchable().optimise(np.int64(0), state) is state


def test_negative_or_non_integer_iterations_are_rejected():
    with pytest.raises(ValueError):
        Untouchable().optimise(-1, 0)
    with pytest.raises(TypeError):
        Untouchable().optimise(2.0, 0)
    with pytest.raises(TypeError):
        Untouchable().optimise(True, 0)
    with pytest.raises(TypeError):
        Untouchable().optimise(np.float64(3.0), 0)


def test_loop_order_progress_and_acceptance():
    # Each step worsens energy by 1 at T=1: p = exp(-1) ~ 0.368
    walk = Walk(draws=[0.1, 0.9, 0.2, 0.5])
    final = walk.optimise(4, 0)

    # accepted, rejected, accepted, rejected
    assert final == 2

    temps = [c for c in walk.calls if isinstance(c, tuple)]
    assert [c[1] for c in temps] == [0.25, 0.5, 0.75, 1.0]
    # temperature sees the pre-step energy
    assert [c[2] for c in temps] == [0.0, 1.0, 1.0, 2.0]

    # initial energy once, then per step: temperature, neighbour, energy, random
    assert walk.calls[0] == "energy"
    step = walk.calls[1:5]
    assert step[0][0] == "temperature"
    assert step[1:] == ["neighbour", "energy", "random"]
    assert walk.calls.count("energy") == 5
    assert walk.calls.count("random") == 4


def test_random_is_drawn_even_for_improvements():
    class Downhill(Walk):
        def neighbour(self, state: int) -> int:
            self.calls.append("neighbour")
            return state - 1

    walk = Downhill(draws=[0.99, 0.99, 0.99])
    assert walk.optimise(3, 10) == 7
    assert walk.calls.count("random") == 3


def test_random_outside_unit_interval_propagates():
    with pytest.raises(ValueError):
        Walk(draws=[1.0]).optimise(1, 0)
    with pytest.raises(ValueError):
        Walk(draws=[-0.1]).optimise(1, 0)


def test_capability_errors_propagate():
    class Broken(Walk):
        def neighbour(self, state: int) -> int:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        Broken(draws=[0.5]).optimise(3, 0)


def test_overridden_accept_probability_is_used():
    class Never(Walk):
        def accept_probability(self, energy_current, energy_neighbour, temperature):
            return -1.0

    class Always(Walk):
        def accept_probability(self, energy_current, energy_neighbour, temperature):
            return 1.0

    state = 0
    assert Never(draws=[0.0] * 5).optimise(5, state) == state
    assert Always(draws=[0.999] * 5).optimise(5, state) == 5


def _initial_tour(seed: int):
    return shuffled_tour(circle_positions(10), random.Random(seed))


def test_same_seed_gives_same_final_state():
    initial = _initial_tour(11)
    a = TravellingSalesman(seed=5).optimise(300, initial)
    b = TravellingSalesman(seed=5).optimise(300, initial)
    assert [p.tag for p in a.order] == [p.tag for p in b.order]


def test_zero_temperature_never_moves_uphill():
    initial = _initial_tour(3)
    salesman = TravellingSalesman(seed=8, schedule=constant(0.0))
    recorder = TraceRecorder()

    final = salesman.optimise(500, initial, callback=recorder)

    energies = [row["current_energy"] for row in recorder.rows]
    assert all(b <= a for a, b in zip(energies, energies[1:]))
    assert salesman.energy(final) <= salesman.energy(initial)


def test_optimise_best_matches_optimise_and_tracks_best():
    initial = _initial_tour(21)
    final = TravellingSalesman(seed=4).optimise(400, initial)

    salesman = TravellingSalesman(seed=4)
    recorder = TraceRecorder()
    result = salesman.optimise_best(400, initial, callback=recorder)

    assert [p.tag for p in result.final_state.order] == [p.tag for p in final.order]
    assert result.final_energy == pytest.approx(salesman.energy(final))
    assert result.best_energy <= result.final_energy
    assert result.best_energy <= salesman.energy(initial)
    assert result.best_energy == pytest.approx(salesman.energy(result.best_state))
    assert result.total_steps == 400
    assert len(recorder.rows) == 400
    assert result.accepted_moves == sum(1 for row in recorder.rows if row["accepted"])
    if result.best_step > 0:
        assert recorder.rows[result.best_step - 1]["current_energy"] == result.best_energy


def test_optimise_best_with_zero_iterations():
    result = Walk(draws=[]).optimise_best(0, 7)
    assert result.final_state == 7
    assert result.best_state == 7
    assert result.best_energy == 7.0
    assert result.best_step == 0
    assert result.total_steps == 0
