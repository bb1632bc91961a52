"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from myanseg.config import Config, ConflictConfig, GranularityConfig, SegmentationConfig


def test_config_defaults():
    """Test default configuration values."""
    config = Config()

    assert config.input_file is None
    assert config.segmentation.engine == "sylbreak"
    assert config.segmentation.under_segmentation_threshold == 4
    assert config.granularity.preset == "syllable"
    assert config.conflicts.max_window == 4
    assert config.conflicts.debounce_seconds == 0.3
    assert config.output.save_conflicts_csv


def test_input_file_converted_to_path():
    """Test string input paths become Path objects."""
    config = Config(input_file="data/input.txt")
    assert config.input_file == Path("data/input.txt")


def test_unknown_rule_rejected():
    """Test unknown granularity rule types fail validation."""
    with pytest.raises(ValidationError):
        GranularityConfig(rules={"classifier": {"mode": "merge"}})


@pytest.mark.parametrize("max_window", [1, 5])
def test_max_window_bounds(max_window):
    """Test the scan window must stay within 2..4."""
    with pytest.raises(ValidationError):
        ConflictConfig(max_window=max_window)


def test_unknown_engine_rejected():
    """Test only the known engines are accepted."""
    with pytest.raises(ValidationError):
        SegmentationConfig(engine="botok")


def test_yaml_round_trip(tmp_path):
    """Test saving and loading a configuration."""
    config = Config(
        input_file="in.txt",
        granularity={"preset": None, "rules": {"negation": {"mode": "merge"}}},
    )
    path = tmp_path / "config.yaml"
    config.to_yaml(path)

    loaded = Config.from_yaml(path)
    assert loaded == config
    assert loaded.granularity.preset is None
    assert loaded.granularity.rules["negation"].mode == "merge"


def test_empty_yaml(tmp_path):
    """Test an empty file yields the defaults."""
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert Config.from_yaml(path) == Config()


def test_yaml_config_loading():
    """Test loading the sample config."""
    config_path = Path(__file__).parent.parent / "config.yaml"

    config = Config.from_yaml(config_path)
    assert config.granularity.preset == "word"
    assert config.granularity.rules["tense"].mode == "merge"
    assert config.input_file == Path("data/input.txt")
