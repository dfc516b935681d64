"""Per-event-type health and economic impact summaries."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
