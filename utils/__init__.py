"""Run trace recording and export helpers."""

from .trace_export import (
    PlotOptions,
    TraceRecorder,
    df_to_markdown,
    plot_tour_png_bytes,
    plot_trace_png_bytes,
    summarize_trace,
)

__all__ = [
    "PlotOptions",
    "TraceRecorder",
    "df_to_markdown",
    "plot_tour_png_bytes",
    "plot_trace_png_bytes",
    "summarize_trace",
]
