"""Project pipelines."""

from kedro.pipeline import Pipeline

from storm_impact.pipelines import data_processing, event_summary, reporting


def register_pipelines() -> dict[str, Pipeline]:
    """Register the project's pipelines.

    Returns:
        A mapping from pipeline names to ``Pipeline`` objects.  The default
        run goes load → clean → summarise → rank → plot.
    """
    pipelines = {
        "data_processing": data_processing.create_pipeline(),
        "event_summary": event_summary.create_pipeline(),
        "reporting": reporting.create_pipeline(),
    }
    pipelines["__default__"] = sum(pipelines.values(), Pipeline([]))
    return pipelines
