"""Clean events → per-event-type impact summaries."""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import summarize_events


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the event_summary pipeline."""
    return pipeline(
        [
            node(
                func=summarize_events,
                inputs="storm_events_clean",
                outputs="event_summaries",
                name="summarize_events",
            ),
        ]
    )
