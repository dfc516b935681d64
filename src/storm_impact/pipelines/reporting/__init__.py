"""Top-10 rankings and bar charts for the two impact questions."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
