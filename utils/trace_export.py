from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd


TRACE_COLUMNS = [
    "step",
    "progress",
    "temperature",
    "current_energy",
    "candidate_energy",
    "acceptance",
    "accepted",
]


class TraceRecorder:
    """Step callback that keeps one row per annealing iteration in memory.

    Pass an instance as `callback=` to `Anneal.optimise` / `optimise_best`.
    States themselves are not stored, only their energies.
    """

    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []

    def __call__(
        self,
        step: int,
        progress: float,
        temperature: float,
        current_state: Any,
        current_energy: float,
        candidate_energy: float,
        acceptance: float,
        accepted: bool,
    ) -> None:
        self.rows.append(
            {
                "step": step,
                "progress": progress,
                "temperature": temperature,
                "current_energy": current_energy,
                "candidate_energy": candidate_energy,
                "acceptance": acceptance,
                "accepted": accepted,
            }
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=TRACE_COLUMNS)


def summarize_trace(df: pd.DataFrame) -> Dict[str, float]:
    if df.empty:
        return {"steps": 0.0, "accepted_moves": 0.0, "acceptance_rate": 0.0}

    accepted = int(df["accepted"].sum())
    return {
        "steps": float(len(df)),
        "accepted_moves": float(accepted),
        "acceptance_rate": accepted / len(df),
        "min_energy": float(df["current_energy"].min()),
        "final_energy": float(df["current_energy"].iloc[-1]),
    }


@dataclass(frozen=True)
class PlotOptions:
    title: Optional[str] = None
    width: float = 7.0
    height: float = 4.0
    dpi: int = 150


def df_to_markdown(df: pd.DataFrame, float_digits: Optional[int] = None) -> str:
    """Render a DataFrame as a GitHub-flavored Markdown table.

    Numeric columns are right-aligned. `float_digits` rounds float cells,
    which keeps trace tables readable.
    """

    # pandas to_markdown needs tabulate; render by hand instead.
    def cell(value: Any) -> str:
        if float_digits is not None and isinstance(value, float):
            value = f"{value:.{float_digits}f}"
        return str(value).replace("\n", " ").replace("|", "\\|")

    numeric = [pd.api.types.is_numeric_dtype(t) and not pd.api.types.is_bool_dtype(t) for t in df.dtypes]

    lines = [
        "| " + " | ".join(cell(c) for c in df.columns) + " |",
        "| " + " | ".join("---:" if num else "---" for num in numeric) + " |",
    ]
    for row in df.itertuples(index=False, name=None):
        lines.append("| " + " | ".join(cell(v) for v in row) + " |")
    return "\n".join(lines) + "\n"


def _figure_to_png(fig) -> bytes:
    import matplotlib.pyplot as plt

    buf = io.BytesIO()
    fig.tight_layout()
    fig.savefig(buf, format="png", bbox_inches="tight")
    plt.close(fig)
    return buf.getvalue()


def plot_trace_png_bytes(df: pd.DataFrame, *, options: PlotOptions = PlotOptions()) -> bytes:
    """Plot current energy and temperature against the step index as PNG bytes."""

    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(options.width, options.height), dpi=options.dpi)
    ax.plot(df["step"], df["current_energy"], label="energy", color="#1f77b4", linewidth=1.2)
    ax.set_xlabel("step")
    ax.set_ylabel("energy")

    # Temperature spans orders of magnitude; log scale on a twin axis.
    ax_t = ax.twinx()
    ax_t.plot(df["step"], df["temperature"], label="temperature", color="#d62728", linewidth=0.8, alpha=0.7)
    ax_t.set_ylabel("temperature")
    if (df["temperature"] > 0).all() and not df.empty:
        ax_t.set_yscale("log")

    if options.title:
        ax.set_title(options.title)

    return _figure_to_png(fig)


def plot_tour_png_bytes(state, *, options: PlotOptions = PlotOptions()) -> bytes:
    """Draw a closed tour (any state with an `order` of x/y/tag positions) as PNG bytes."""

    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    order = list(state.order)
    xs = [p.x for p in order] + [order[0].x] if order else []
    ys = [p.y for p in order] + [order[0].y] if order else []

    fig, ax = plt.subplots(figsize=(options.height, options.height), dpi=options.dpi)
    ax.plot(xs, ys, marker="o", color="#2ca02c", linewidth=1.0)
    for p in order:
        ax.annotate(str(p.tag), (p.x, p.y), textcoords="offset points", xytext=(4, 4), fontsize=8)
    ax.set_aspect("equal")
    ax.axis("off")

    if options.title:
        ax.set_title(options.title)

    return _figure_to_png(fig)
