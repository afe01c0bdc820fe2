"""Demo runner: anneal a shuffled tour of points on a circle.

The optimal tour visits the points in tag order, so every run can be checked.

Usage:
    python scripts/run_tsp_demo.py
    python scripts/run_tsp_demo.py --points 12 --iterations 2000 --trials 50

"""

from __future__ import annotations

from pathlib import Path
import argparse
import logging
import sys

import pandas as pd

# Ensure project root is on PYTHONPATH when running as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from problems.travelling_salesman import solve_circle_tour, tour_as_rows
from utils.trace_export import df_to_markdown


logger = logging.getLogger("run_tsp_demo")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Simulated annealing on a circle of points.")
    parser.add_argument("--points", type=int, default=10, help="Number of points on the circle")
    parser.add_argument("--iterations", type=int, default=1_000, help="Annealing iterations per run")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the first run")
    parser.add_argument("--trials", type=int, default=1, help="Independent runs (sequential)")
    parser.add_argument("--markdown", action="store_true", help="Print the tour as a Markdown table")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if args.trials < 1:
        parser.error("--trials must be >= 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    successes = 0
    for trial in range(args.trials):
        seed = None if args.seed is None else args.seed + trial
        state, metrics = solve_circle_tour(num_points=args.points, num_iterations=args.iterations, seed=seed)
        successes += int(metrics["is_optimal"])
        logger.info("trial %d: length %.2f, optimal=%s", trial + 1, metrics["final_length"], bool(metrics["is_optimal"]))

    # Show the last run in full
    df = pd.DataFrame(tour_as_rows(state))

    print("\n=== Final tour ===")
    print(df_to_markdown(df) if args.markdown else df.to_string(index=False))

    print("\n=== Metrics ===")
    for k, v in metrics.items():
        print(f"{k}: {v}")

    if metrics["is_optimal"]:
        print("\nOptimal solution was found!")
    else:
        print("\nOptimal solution was not found :(")

    if args.trials > 1:
        print(f"\nSuccess rate: {successes}/{args.trials} ({successes / args.trials:.0%})")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
