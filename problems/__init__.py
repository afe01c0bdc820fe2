"""Example problems solved with the annealing engine."""

from .travelling_salesman import (
    Position,
    TourState,
    TravellingSalesman,
    circle_positions,
    is_circle_order,
    shuffled_tour,
    solve_circle_tour,
    tour_as_rows,
    tour_length,
)

__all__ = [
    "Position",
    "TourState",
    "TravellingSalesman",
    "circle_positions",
    "is_circle_order",
    "shuffled_tour",
    "solve_circle_tour",
    "tour_as_rows",
    "tour_length",
]
