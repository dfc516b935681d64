"""End-to-end run of the default pipeline through a KedroSession.

A throwaway conf directory points every dataset (raw CSV, parquet,
JSON, PNG) under tmp_path, so the run exercises the real catalog
hand-offs without touching the project's data/ folder.
"""

import json
from pathlib import Path

import pytest
from kedro.framework.session import KedroSession
from kedro.framework.startup import bootstrap_project

PROJECT_ROOT = Path(__file__).resolve().parents[1]

HEADER = "EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"
SCENARIO_ROWS = (
    "Tornado,5,10,1.0,K,0,\n"
    "Tornado,3,2,2.0,M,1.0,K\n"
    "Flood,0,1,5.0,B,0,\n"
)


def _write_conf(root: Path, raw_path: Path) -> Path:
    """Minimal base/local conf with absolute paths under ``root``."""
    data = root / "data"
    conf = root / "conf"
    (conf / "base").mkdir(parents=True)
    (conf / "local").mkdir()

    (conf / "base" / "parameters.yml").write_text(
        f"raw_data_path: {raw_path.as_posix()}\n"
        "source_url: null\n"
        "reporting:\n"
        "  top_n: 10\n"
        f"  figures_dir: {(data / '08_reporting').as_posix()}\n"
        "  dpi: 50\n"
    )
    (conf / "base" / "catalog.yml").write_text(
        "storm_events_clean:\n"
        "  type: pandas.ParquetDataset\n"
        f"  filepath: {(data / 'storm_events_clean.parquet').as_posix()}\n"
        "event_summaries:\n"
        "  type: pandas.ParquetDataset\n"
        f"  filepath: {(data / 'event_summaries.parquet').as_posix()}\n"
        "health_rankings:\n"
        "  type: json.JSONDataset\n"
        f"  filepath: {(data / 'health_rankings.json').as_posix()}\n"
        "economic_rankings:\n"
        "  type: json.JSONDataset\n"
        f"  filepath: {(data / 'economic_rankings.json').as_posix()}\n"
    )
    return conf


def _run(tmp_path: Path, csv_text: str) -> Path:
    raw_path = tmp_path / "StormData.csv"
    raw_path.write_text(csv_text)
    conf = _write_conf(tmp_path, raw_path)

    bootstrap_project(PROJECT_ROOT)
    with KedroSession.create(
        project_path=PROJECT_ROOT, conf_source=str(conf)
    ) as session:
        session.run()
    return tmp_path / "data"


# ── Test 1: Full default run ─────────────────────────────────────
class TestDefaultPipelineRun:
    @pytest.fixture()
    def data_dir(self, tmp_path):
        return _run(tmp_path, HEADER + SCENARIO_ROWS)

    def test_health_rankings(self, data_dir):
        rankings = json.loads((data_dir / "health_rankings.json").read_text())
        assert rankings["total_fatalities"] == [["Tornado", 8.0], ["Flood", 0.0]]
        assert rankings["total_health_impact"] == [["Tornado", 20.0], ["Flood", 1.0]]

    def test_economic_rankings(self, data_dir):
        rankings = json.loads((data_dir / "economic_rankings.json").read_text())
        assert rankings["total_economic_impact"] == [
            ["Flood", 5_000_000_000.0],
            ["Tornado", 2_002_000.0],
        ]
        assert rankings["total_crop_damage"][0] == ["Tornado", 1_000.0]

    def test_intermediate_datasets_and_charts_written(self, data_dir):
        assert (data_dir / "storm_events_clean.parquet").exists()
        assert (data_dir / "event_summaries.parquet").exists()
        assert (data_dir / "08_reporting" / "health_impact.png").exists()
        assert (data_dir / "08_reporting" / "economic_impact.png").exists()


# ── Test 2: Header-only input ────────────────────────────────────
class TestEmptyDatasetRun:
    def test_empty_rankings_instead_of_failure(self, tmp_path):
        data_dir = _run(tmp_path, HEADER)

        for name in ("health_rankings.json", "economic_rankings.json"):
            rankings = json.loads((data_dir / name).read_text())
            assert all(r == [] for r in rankings.values())
        assert (data_dir / "08_reporting" / "health_impact.png").exists()
