"""Clean → summary nodes: one row of health and economic totals per event type.

The group-by itself lives in ``storm_impact.impact.aggregate_events`` as
an explicit fold; this node feeds it the rows of the clean events table,
whose dollar columns were already decoded by ``decode_damage_exponents``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields

import pandas as pd

from storm_impact.impact import EventSummary, aggregate_events

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS: list[str] = [f.name for f in fields(EventSummary)]

# Attributes aggregate_events reads from each row
_FOLD_COLUMNS: list[str] = [
    "event_type",
    "fatalities",
    "injuries",
    "property_damage_dollars",
    "crop_damage_dollars",
]


# ── Node 1 ───────────────────────────────────────────────────────
def summarize_events(storm_events_clean: pd.DataFrame) -> pd.DataFrame:
    """Aggregate clean events into one summary row per exact event_type.

    Event types are not canonicalised: differently capitalised or
    misspelled labels stay separate rows.  An empty input produces an
    empty table with the summary columns.

    Args:
        storm_events_clean: Output of the data_processing pipeline.

    Returns:
        DataFrame with columns SUMMARY_COLUMNS, in order of first
        appearance of each event type.
    """
    rows = storm_events_clean[_FOLD_COLUMNS].itertuples(
        index=False, name="DecodedEvent"
    )
    summaries = aggregate_events(rows)
    result = pd.DataFrame(
        [asdict(s) for s in summaries.values()], columns=SUMMARY_COLUMNS
    )

    if result.empty:
        logger.warning("No events to summarise: summary table is empty")
    else:
        logger.info(
            "Summarised %s events into %s event types "
            "(fatalities: %s | injuries: %s | economic impact: $%s)",
            f"{len(storm_events_clean):,}",
            f"{len(result):,}",
            f"{result['total_fatalities'].sum():,.0f}",
            f"{result['total_injuries'].sum():,.0f}",
            f"{result['total_economic_impact'].sum():,.0f}",
        )
    return result
