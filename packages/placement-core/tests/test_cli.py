"""
Tests for the placement CLI.

Runs the typer app against request files written to tmp_path and checks
the JSON output and exit codes.
"""

import json

import pytest
from typer.testing import CliRunner

from placement_core.cli.main import app
from placement_core.config import settings


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def write_request(tmp_path):
    """Write a request document and return its path."""

    def _write(doc: dict, name: str = "request.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(doc))
        return str(path)

    return _write


def placement_of(output: str) -> dict[str, int]:
    return {entry["name"]: entry["replicas"] for entry in json.loads(output)}


DYNAMIC_PLACEMENT = {
    "replica_scheduling": {
        "replica_scheduling_type": "Divided",
        "replica_division_preference": "Weighted",
        "weight_preference": {"dynamic_weight": "AvailableReplicas"},
    }
}


class TestDivideCommand:
    """Tests for 'placement schedule divide'."""

    def test_dynamic_weight(self, runner, write_request):
        path = write_request(
            {
                "strategy": "DynamicWeight",
                "target_replicas": 12,
                "available_clusters": [
                    {"name": "member1", "replicas": 20},
                    {"name": "member2", "replicas": 12},
                    {"name": "member3", "replicas": 6},
                ],
            }
        )

        result = runner.invoke(app, ["schedule", "divide", path, "--json"])

        assert result.exit_code == 0
        assert placement_of(result.stdout) == {"member1": 7, "member2": 4, "member3": 1}

    def test_insufficient_capacity_exits_1(self, runner, write_request):
        path = write_request(
            {"target_replicas": 5, "available_clusters": [{"name": "member1", "replicas": 2}]}
        )

        result = runner.invoke(app, ["schedule", "divide", path])

        assert result.exit_code == 1
        assert "max 2 replicas are supported" in result.stdout

    def test_invalid_request_exits_1(self, runner, write_request):
        path = write_request({"target_replicas": -3})

        result = runner.invoke(app, ["schedule", "divide", path])

        assert result.exit_code == 1
        assert "Invalid request" in result.stdout

    def test_missing_file_exits_1(self, runner, tmp_path):
        result = runner.invoke(app, ["schedule", "divide", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Cannot read" in result.stdout

    def test_table_output(self, runner, write_request):
        path = write_request(
            {
                "strategy": "Aggregated",
                "target_replicas": 12,
                "available_clusters": [
                    {"name": "member1", "replicas": 6},
                    {"name": "member2", "replicas": 12},
                ],
            }
        )

        result = runner.invoke(app, ["schedule", "divide", path])

        assert result.exit_code == 0
        assert "member2" in result.stdout
        assert "Total: 12 replicas" in result.stdout


class TestAssignCommand:
    """Tests for 'placement schedule assign'."""

    def test_first_schedule(self, runner, write_request):
        path = write_request(
            {
                "candidates": [
                    {"name": "member1", "available_replicas": 18},
                    {"name": "member2", "available_replicas": 12},
                    {"name": "member3", "available_replicas": 6},
                ],
                "placement": DYNAMIC_PLACEMENT,
                "spec": {"replicas": 12},
            }
        )

        result = runner.invoke(app, ["schedule", "assign", path, "--json"])

        assert result.exit_code == 0
        assert placement_of(result.stdout) == {"member1": 6, "member2": 4, "member3": 2}

    def test_no_candidates_exits_1(self, runner, write_request):
        path = write_request({"candidates": [], "spec": {"replicas": 1}})

        result = runner.invoke(app, ["schedule", "assign", path])

        assert result.exit_code == 1
        assert "no clusters available" in result.stdout

    def test_duplicate_candidates_exit_1(self, runner, write_request):
        path = write_request(
            {
                "candidates": [
                    {"name": "m1", "available_replicas": 3},
                    {"name": "m1", "available_replicas": 3},
                    {"name": "m2", "available_replicas": 3},
                ],
                "placement": DYNAMIC_PLACEMENT,
                "spec": {"replicas": 10},
            }
        )

        result = runner.invoke(app, ["schedule", "assign", path, "--json"])

        assert result.exit_code == 1
        assert "Duplicate cluster names: m1" in result.stdout

    def test_json_output_from_settings(self, runner, write_request, monkeypatch):
        """PLACEMENT_JSON_OUTPUT switches the default to JSON."""
        monkeypatch.setattr(settings, "json_output", True)
        path = write_request(
            {
                "candidates": [{"name": "member1"}, {"name": "member2"}],
                "placement": {"replica_scheduling": {"replica_scheduling_type": "Duplicated"}},
                "spec": {"replicas": 2},
            }
        )

        result = runner.invoke(app, ["schedule", "assign", path])

        assert result.exit_code == 0
        assert placement_of(result.stdout) == {"member1": 2, "member2": 2}


class TestScaleCommands:
    """Tests for 'placement schedule scale-up' and 'scale-down'."""

    def test_scale_up(self, runner, write_request):
        path = write_request(
            {
                "candidates": [
                    {"name": "member1", "available_replicas": 2},
                    {"name": "member2", "available_replicas": 6},
                    {"name": "member3", "available_replicas": 4},
                ],
                "placement": DYNAMIC_PLACEMENT,
                "spec": {"replicas": 10, "clusters": [{"name": "member1", "replicas": 4}]},
            }
        )

        result = runner.invoke(app, ["schedule", "scale-up", path, "--json"])

        assert result.exit_code == 0
        assert placement_of(result.stdout) == {"member1": 5, "member2": 3, "member3": 2}

    def test_scale_down(self, runner, write_request):
        path = write_request(
            {
                "candidates": [{"name": "member1"}, {"name": "member2"}],
                "placement": DYNAMIC_PLACEMENT,
                "spec": {
                    "replicas": 6,
                    "clusters": [
                        {"name": "member1", "replicas": 4},
                        {"name": "member2", "replicas": 8},
                    ],
                },
            }
        )

        result = runner.invoke(app, ["schedule", "scale-down", path, "--json"])

        assert result.exit_code == 0
        assert placement_of(result.stdout) == {"member1": 2, "member2": 4}

    def test_scale_down_with_duplicated_placement_exits_1(self, runner, write_request):
        path = write_request(
            {
                "candidates": [{"name": "member1"}],
                "spec": {"replicas": 1, "clusters": [{"name": "member1", "replicas": 2}]},
            }
        )

        result = runner.invoke(app, ["schedule", "scale-down", path])

        assert result.exit_code == 1
        assert "undefined strategy type" in result.stdout


class TestWeightsCommand:
    def test_static_weights(self, runner, write_request):
        path = write_request(
            {
                "candidates": [
                    {"name": "member1", "labels": {"env": "prod"}},
                    {"name": "member2", "labels": {"env": "dev"}},
                ],
                "placement": {
                    "replica_scheduling": {
                        "replica_division_preference": "Weighted",
                        "weight_preference": {
                            "static_weight_list": [
                                {
                                    "target_cluster": {
                                        "label_selector": {"match_labels": {"env": "prod"}}
                                    },
                                    "weight": 3,
                                }
                            ]
                        },
                    }
                },
                "spec": {"replicas": 4},
            }
        )

        result = runner.invoke(app, ["schedule", "weights", path, "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"cluster_name": "member1", "weight": 3}]
