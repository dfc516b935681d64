"""Reporting pipeline: event summaries → rankings → charts.

Node dependency graph:
    event_summaries -> [rank_health_impact]   -> health_rankings
    event_summaries -> [rank_economic_impact] -> economic_rankings
    health_rankings   -> [plot_health_impact]   -> health_impact_chart
    economic_rankings -> [plot_economic_impact] -> economic_impact_chart

The health and economic branches are independent of each other.
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import (
    plot_economic_impact,
    plot_health_impact,
    rank_economic_impact,
    rank_health_impact,
)


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the reporting pipeline."""
    return pipeline(
        [
            node(
                func=rank_health_impact,
                inputs=["event_summaries", "params:reporting.top_n"],
                outputs="health_rankings",
                name="rank_health_impact",
            ),
            node(
                func=rank_economic_impact,
                inputs=["event_summaries", "params:reporting.top_n"],
                outputs="economic_rankings",
                name="rank_economic_impact",
            ),
            node(
                func=plot_health_impact,
                inputs=["health_rankings", "params:reporting"],
                outputs="health_impact_chart",
                name="plot_health_impact",
            ),
            node(
                func=plot_economic_impact,
                inputs=["economic_rankings", "params:reporting"],
                outputs="economic_impact_chart",
                name="plot_economic_impact",
            ),
        ]
    )
