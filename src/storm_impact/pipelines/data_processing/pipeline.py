"""Raw → clean pipeline for the NOAA Storm Database extract.

This pipeline reads (and on first run downloads) the StormData CSV,
keeps the impact columns, drops malformed records and decodes the two
damage-exponent codes into dollar amounts.
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import (
    decode_damage_exponents,
    drop_malformed_records,
    load_storm_data,
    select_impact_columns,
)


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the data_processing pipeline.

    Node chain:
        cached CSV → load → select columns → drop malformed
        → decode exponents → clean parquet
    """
    return pipeline(
        [
            node(
                func=load_storm_data,
                inputs=["params:raw_data_path", "params:source_url"],
                outputs="storm_data_raw",
                name="load_storm_data",
            ),
            node(
                func=select_impact_columns,
                inputs="storm_data_raw",
                outputs="storm_data_selected",
                name="select_impact_columns",
            ),
            node(
                func=drop_malformed_records,
                inputs="storm_data_selected",
                outputs="storm_data_valid",
                name="drop_malformed_records",
            ),
            node(
                func=decode_damage_exponents,
                inputs="storm_data_valid",
                outputs="storm_events_clean",
                name="decode_damage_exponents",
            ),
        ]
    )
