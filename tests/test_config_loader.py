"""Tests for definition file loading."""

import textwrap

import pytest

from measure_validator.config_loader import find_group, load_threshold_group
from measure_validator.errors import ConfigurationError
from measure_validator.thresholds import ThresholdConfig


def _write(tmp_path, text):
    path = tmp_path / "valid_measure.toml"
    path.write_text(textwrap.dedent(text))
    return path


def test_load_top_level_group(tmp_path):
    """Test reading a top-level ValidMeasure table."""
    path = _write(
        tmp_path,
        """
        [ValidMeasure]
        MinEmission = 5.0
        MaxEmission = 60
        PixelsFromEdge = 10
        """,
    )
    group = load_threshold_group(path)
    assert group == {"MinEmission": 5.0, "MaxEmission": 60, "PixelsFromEdge": 10}


def test_load_nested_group(tmp_path):
    """Test that the table is found inside other tables."""
    path = _write(
        tmp_path,
        """
        [Operator]
        Name = "interest"

        [Operator.validmeasure]
        MetersFromEdge = 250.0
        """,
    )
    assert load_threshold_group(path) == {"MetersFromEdge": 250.0}


def test_find_group_prefers_top_level():
    """Test lookup order when the name appears twice."""
    cfg = {"Outer": {"ValidMeasure": {"MinDN": 1}}, "ValidMeasure": {"MinDN": 2}}
    assert find_group(cfg) == {"MinDN": 2}
    assert find_group({"Other": {}}) is None


def test_missing_group_raises(tmp_path):
    """Test a file without a ValidMeasure table."""
    path = _write(tmp_path, "[Other]\nMinDN = 1\n")
    with pytest.raises(ConfigurationError, match="No \\[ValidMeasure\\] table"):
        load_threshold_group(path)


def test_malformed_file_raises(tmp_path):
    """Test a file that is not valid TOML."""
    path = _write(tmp_path, "[ValidMeasure\nMinDN = \n")
    with pytest.raises(ConfigurationError, match="Failed to parse"):
        load_threshold_group(path)


def test_missing_file_raises(tmp_path):
    """Test a path that does not exist."""
    with pytest.raises(FileNotFoundError):
        load_threshold_group(tmp_path / "nope.toml")


def test_threshold_config_from_file(tmp_path):
    """Test building thresholds straight from a file."""
    path = _write(
        tmp_path,
        """
        [ValidMeasure]
        MaxIncidence = 80
        ResidualMagnitude = 1.5
        """,
    )
    config = ThresholdConfig.from_file(path)
    assert config.max_incidence_angle == 80.0
    assert config.residual_magnitude_tolerance == 1.5


def test_conflicting_file_raises(tmp_path):
    """Test that file values go through the same checks."""
    path = _write(
        tmp_path,
        """
        [ValidMeasure]
        SampleResidual = 1.0
        ResidualMagnitude = 1.5
        """,
    )
    with pytest.raises(ConfigurationError, match="Cannot have both"):
        ThresholdConfig.from_file(path)
