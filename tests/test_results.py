"""Tests for the result schema validation, writing, and run ID generation."""

import json
import re
from dataclasses import replace
from pathlib import Path

import pytest

from rwr.config import DEFAULT_CONFIG, WalkConfig
from rwr.results import generate_run_id, get_git_hash, load_result, validate_result, write_result

CONFIG = replace(
    DEFAULT_CONFIG,
    source_vertex=56,
    walk=WalkConfig(restart_probability=0.25, num_iterations=2),
    description="reference graph",
    tags=("test",),
)

SCALARS = {"n": 2, "num_edges": 3, "num_dangling": 0, "final_mass": 1.0}


class TestValidateResult:
    """validate_result accepts valid dicts and rejects invalid ones."""

    @pytest.fixture
    def valid_result(self):
        return {
            "schema_version": "1.0",
            "run_id": "src56_a0.25_it2_20261018_120000",
            "timestamp": "2026-10-18T12:00:00+00:00",
            "description": "test run",
            "tags": ["test"],
            "config": {"walk": {"num_iterations": 2}},
            "metrics": {"scalars": dict(SCALARS)},
            "steady_state": {"1": 0.5, "2": 0.5},
        }

    def test_valid(self, valid_result):
        assert validate_result(valid_result) == []

    def test_missing_fields(self):
        errors = validate_result({"schema_version": "1.0"})
        assert any("Missing required" in e for e in errors)

    def test_missing_scalars(self, valid_result):
        valid_result["metrics"] = {"curves": {}}
        assert any("scalars" in e for e in validate_result(valid_result))

    def test_missing_scalar_field(self, valid_result):
        del valid_result["metrics"]["scalars"]["final_mass"]
        assert any("final_mass" in e for e in validate_result(valid_result))

    def test_bad_timestamp(self, valid_result):
        valid_result["timestamp"] = "yesterday"
        assert any("ISO 8601" in e for e in validate_result(valid_result))

    def test_tags_must_be_list(self, valid_result):
        valid_result["tags"] = "test"
        assert any("tags" in e for e in validate_result(valid_result))

    def test_steady_state_length_mismatch(self, valid_result):
        valid_result["steady_state"] = {"1": 1.0}
        assert any("steady_state length" in e for e in validate_result(valid_result))


class TestWriteResult:
    """write_result produces a valid result.json."""

    def test_write_and_load(self, tmp_path: Path):
        path = write_result(
            CONFIG,
            metrics={"scalars": dict(SCALARS)},
            steady_state={12: 0.25, 34: 0.75},
            results_dir=tmp_path,
        )
        assert path.name == "result.json"
        result = load_result(path)
        assert result["steady_state"] == {"12": 0.25, "34": 0.75}
        assert result["description"] == "reference graph"
        assert result["tags"] == ["test"]
        assert result["config"]["source_vertex"] == 56
        assert "config_hash" in result["metadata"]
        assert "code_hash" in result["metadata"]

    def test_reuses_run_id(self, tmp_path: Path):
        path = write_result(
            CONFIG,
            metrics={"scalars": dict(SCALARS)},
            results_dir=tmp_path,
            run_id="fixed",
        )
        assert path == tmp_path / "fixed" / "result.json"
        assert json.loads(path.read_text())["run_id"] == "fixed"

    def test_invalid_metrics_rejected(self, tmp_path: Path):
        with pytest.raises(ValueError, match="validation failed"):
            write_result(CONFIG, metrics={}, results_dir=tmp_path)

    def test_load_invalid_file(self, tmp_path: Path):
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"schema_version": "1.0"}))
        with pytest.raises(ValueError):
            load_result(path)


class TestRunId:
    """Run IDs encode the walk parameters."""

    def test_format(self):
        run_id = generate_run_id(CONFIG)
        assert re.fullmatch(r"src56_a0\.25_it2_\d{8}_\d{6}", run_id)

    def test_git_hash_format(self):
        git_hash = get_git_hash()
        assert git_hash == "unknown" or re.fullmatch(r"[0-9a-f]{7,}(-dirty)?", git_hash)
