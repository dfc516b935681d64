"""Reporting nodes: rank event types and draw the two impact charts.

Question 1: which event types are most harmful to population health?
Question 2: which event types have the greatest economic consequences?

Each question gets three top-N rankings (two components plus their sum)
and one PNG with a horizontal bar panel per ranking.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd

from storm_impact.impact import (
    ECONOMIC_METRICS,
    HEALTH_METRICS,
    EventSummary,
    rank_summaries,
)

matplotlib.use("Agg")  # non-interactive backend for CI / headless runs

logger = logging.getLogger(__name__)

_METRIC_LABELS: dict[str, str] = {
    "total_fatalities": "Fatalities",
    "total_injuries": "Injuries",
    "total_health_impact": "Fatalities + injuries",
    "total_property_damage": "Property damage (US$ billions)",
    "total_crop_damage": "Crop damage (US$ billions)",
    "total_economic_impact": "Property + crop damage (US$ billions)",
}

# Dollar metrics are plotted in billions
_SCALE: dict[str, float] = {m: 1e9 for m in ECONOMIC_METRICS}


# ── helpers ─────────────────────────────────────────────────────
def _summaries(event_summaries: pd.DataFrame) -> list[EventSummary]:
    return [
        EventSummary(**row) for row in event_summaries.to_dict(orient="records")
    ]


def _rank(
    event_summaries: pd.DataFrame,
    metrics: tuple[str, ...],
    top_n: int,
) -> dict[str, list[list[Any]]]:
    summaries = _summaries(event_summaries)
    rankings = {
        metric: [
            [name, float(value)]
            for name, value in rank_summaries(summaries, metric, top_n)
        ]
        for metric in metrics
    }
    for metric, ranking in rankings.items():
        logger.info(
            "Top %d by %s: %s",
            len(ranking),
            metric,
            [name for name, _ in ranking],
        )
    return rankings


def _plot_rankings(
    rankings: dict[str, list[list[Any]]],
    title: str,
    output_path: Path,
    dpi: int,
) -> str:
    """Draw one horizontal bar panel per metric and save as PNG."""
    fig, axes = plt.subplots(1, len(rankings), figsize=(6 * len(rankings), 6))
    if len(rankings) == 1:
        axes = [axes]

    for ax, (metric, ranking) in zip(axes, rankings.items()):
        label = _METRIC_LABELS.get(metric, metric)
        if not ranking:
            ax.text(0.5, 0.5, "No data", ha="center", va="center", fontsize=14)
            ax.set_axis_off()
            ax.set_title(label)
            continue

        # Largest at the top: barh draws the first entry at the bottom
        names = [name for name, _ in reversed(ranking)]
        values = [value / _SCALE.get(metric, 1.0) for _, value in reversed(ranking)]
        ax.barh(names, values, color="steelblue", edgecolor="black")
        ax.set_xlabel(label)
        ax.set_title(label)
        ax.grid(True, alpha=0.3, axis="x")

    fig.suptitle(title, fontsize=14, fontweight="bold")
    fig.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi)
    plt.close(fig)

    logger.info("Saved chart %s", output_path)
    return str(output_path)


# ── Node 1 ──────────────────────────────────────────────────────
def rank_health_impact(
    event_summaries: pd.DataFrame,
    top_n: int,
) -> dict[str, list[list[Any]]]:
    """Top-N event types by fatalities, injuries and their sum.

    Returns:
        {metric: [[event_type, value], ...]} sorted descending.
    """
    return _rank(event_summaries, HEALTH_METRICS, top_n)


# ── Node 2 ──────────────────────────────────────────────────────
def rank_economic_impact(
    event_summaries: pd.DataFrame,
    top_n: int,
) -> dict[str, list[list[Any]]]:
    """Top-N event types by property damage, crop damage and their sum."""
    return _rank(event_summaries, ECONOMIC_METRICS, top_n)


# ── Node 3 ──────────────────────────────────────────────────────
def plot_health_impact(
    health_rankings: dict[str, list[list[Any]]],
    reporting: dict[str, Any],
) -> str:
    """Save the population-health bar chart and return its path."""
    return _plot_rankings(
        health_rankings,
        "Event types most harmful to population health",
        Path(reporting["figures_dir"]) / "health_impact.png",
        reporting.get("dpi", 150),
    )


# ── Node 4 ──────────────────────────────────────────────────────
def plot_economic_impact(
    economic_rankings: dict[str, list[list[Any]]],
    reporting: dict[str, Any],
) -> str:
    """Save the economic-consequences bar chart and return its path."""
    return _plot_rankings(
        economic_rankings,
        "Event types with the greatest economic consequences",
        Path(reporting["figures_dir"]) / "economic_impact.png",
        reporting.get("dpi", 150),
    )
