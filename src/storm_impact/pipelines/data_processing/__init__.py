"""Raw → clean data processing pipeline for NOAA storm events."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
