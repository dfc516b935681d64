"""Damage-exponent decoding and per-event-type impact aggregation.

This is the analytical core shared by the ``data_processing`` and
``event_summary`` pipelines.  It is plain Python on purpose: the group-by
is an explicit fold into a dict keyed by event type, so it can be tested
without pandas and reused on any iterable of records.

NOAA stores monetary damage as a magnitude plus a one-character exponent
code ("K" = thousands, "M" = millions, ...).  The code column is messy
(lowercase variants, digits, "+", "-", "?"), so decoding is a total
function: anything we don't recognise means "no scaling".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

# ── Exponent codes → power of ten ────────────────────────────────
_EXPONENT_CODES: dict[str, int] = {
    "B": 9,
    "M": 6,
    "K": 3,
    "H": 2,
}

HEALTH_METRICS: tuple[str, ...] = (
    "total_fatalities",
    "total_injuries",
    "total_health_impact",
)
ECONOMIC_METRICS: tuple[str, ...] = (
    "total_property_damage",
    "total_crop_damage",
    "total_economic_impact",
)
METRICS: tuple[str, ...] = HEALTH_METRICS + ECONOMIC_METRICS

# Numeric fields a record must carry to be counted
REQUIRED_NUMERIC_FIELDS: tuple[str, ...] = (
    "fatalities",
    "injuries",
    "property_damage",
    "crop_damage",
)


# ── Field normalizer ─────────────────────────────────────────────
def decode_exponent(code: object) -> int:
    """Map a damage-exponent code to a power-of-ten exponent.

    Examples:
        "K" / "k" → 3
        "M" / "m" → 6
        "B" / "b" → 9
        "H" / "h" → 2
        "5"       → 5
        "", "+", "-", "?", None, NaN → 0
    """
    if not isinstance(code, str) or len(code) != 1:
        return 0
    if code in "0123456789":
        return int(code)
    return _EXPONENT_CODES.get(code.upper(), 0)


def decode_amount(amount: float, code: object) -> float:
    """Return ``amount × 10^exponent`` for a raw damage amount and its code."""
    return amount * 10 ** decode_exponent(code)


# ── Records ──────────────────────────────────────────────────────
@dataclass(frozen=True)
class EventRecord:
    """One storm event with its health and (encoded) damage fields."""

    event_type: str
    fatalities: float
    injuries: float
    property_damage: float
    property_damage_exp: str
    crop_damage: float
    crop_damage_exp: str

    @property
    def property_damage_dollars(self) -> float:
        return decode_amount(self.property_damage, self.property_damage_exp)

    @property
    def crop_damage_dollars(self) -> float:
        return decode_amount(self.crop_damage, self.crop_damage_exp)


# ── Aggregator ───────────────────────────────────────────────────
@dataclass(frozen=True)
class EventSummary:
    """Health and economic totals for one event type."""

    event_type: str
    total_fatalities: float
    total_injuries: float
    total_health_impact: float
    total_property_damage: float
    total_crop_damage: float
    total_economic_impact: float


def aggregate_events(records: Iterable[Any]) -> dict[str, EventSummary]:
    """Fold records into one EventSummary per exact event_type string.

    Any record with ``event_type``, ``fatalities``, ``injuries``,
    ``property_damage_dollars`` and ``crop_damage_dollars`` attributes
    works: an EventRecord decodes its dollars on access, a row of the
    clean events table carries them already decoded.

    Grouping is exact string equality: "TSTM WIND" and "Tstm Wind" stay
    separate groups.  The returned dict is in order of first appearance.
    """
    # event_type → [fatalities, injuries, property $, crop $]
    sums: dict[str, list[float]] = {}
    for record in records:
        acc = sums.setdefault(record.event_type, [0.0, 0.0, 0.0, 0.0])
        acc[0] += record.fatalities
        acc[1] += record.injuries
        acc[2] += record.property_damage_dollars
        acc[3] += record.crop_damage_dollars

    return {
        event_type: EventSummary(
            event_type=event_type,
            total_fatalities=fatalities,
            total_injuries=injuries,
            total_health_impact=fatalities + injuries,
            total_property_damage=prop,
            total_crop_damage=crop,
            total_economic_impact=prop + crop,
        )
        for event_type, (fatalities, injuries, prop, crop) in sums.items()
    }


def rank_summaries(
    summaries: Iterable[EventSummary],
    metric: str,
    n: int = 10,
) -> list[tuple[str, float]]:
    """Top-``n`` (event_type, value) pairs, descending by ``metric``.

    Ties keep the input order (sorted() is stable, also with reverse=True).
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown metric {metric!r}; expected one of {METRICS}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    ranked = sorted(summaries, key=lambda s: getattr(s, metric), reverse=True)
    return [(s.event_type, getattr(s, metric)) for s in ranked[:n]]
