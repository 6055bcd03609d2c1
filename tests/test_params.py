"""Tests for clustering parameters."""

import json
from dataclasses import FrozenInstanceError

import pytest

from gapchain.params import ClusterParams


class TestClusterParams:
    def test_defaults(self, default_params):
        assert default_params.fixed_separation == 5
        assert default_params.max_separation == 1000
        assert default_params.min_output_score == 200
        assert default_params.separation_factor == 0.05
        assert default_params.use_extents is False

    @pytest.mark.parametrize("field", [
        "fixed_separation", "max_separation", "min_output_score", "separation_factor",
    ])
    def test_negative_values_rejected(self, field):
        with pytest.raises(ValueError):
            ClusterParams(**{field: -1})

    def test_frozen(self, default_params):
        with pytest.raises(FrozenInstanceError):
            default_params.max_separation = 10

    def test_diagonal_tolerance_floor(self, default_params):
        assert default_params.diagonal_tolerance(0) == 5
        assert default_params.diagonal_tolerance(-400) == 5
        assert default_params.diagonal_tolerance(100) == 5

    def test_diagonal_tolerance_grows_and_truncates(self, default_params):
        assert default_params.diagonal_tolerance(600) == 30
        # 0.05 * 139 = 6.95
        assert default_params.diagonal_tolerance(139) == 6

    def test_dict_roundtrip_ignores_unknown_keys(self):
        params = ClusterParams(fixed_separation=8, use_extents=True)
        data = params.to_dict()
        data["unused"] = 1
        assert ClusterParams.from_dict(data) == params

    def test_from_json(self, tmp_path):
        p = tmp_path / "params.json"
        p.write_text(json.dumps({"min_output_score": 65, "max_separation": 90}))
        params = ClusterParams.from_json(p)
        assert params.min_output_score == 65
        assert params.max_separation == 90
        assert params.fixed_separation == 5
