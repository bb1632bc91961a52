"""Configuration management for the segmentation editor core."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .granularity import RULE_TYPES


class SegmentationConfig(BaseModel):
    """Configuration for the segmentation engine."""

    engine: Literal["sylbreak", "remote"] = "sylbreak"
    under_segmentation_threshold: int = Field(default=4, ge=1)


class RemoteConfig(BaseModel):
    """Configuration for the external segmentation service."""

    url: str = "http://localhost:8000/segment"
    timeout: float = Field(default=10.0, gt=0)


class RuleOverride(BaseModel):
    """Per-rule override applied after the preset."""

    mode: Optional[Literal["split", "merge"]] = None
    enabled: Optional[bool] = None


class GranularityConfig(BaseModel):
    """Granularity preset and rule overrides."""

    preset: Optional[Literal["syllable", "word", "phrase"]] = "syllable"
    rules: dict[str, RuleOverride] = Field(default_factory=dict)

    @field_validator("rules")
    @classmethod
    def check_rule_types(cls, v):
        """Reject unknown rule types."""
        unknown = sorted(set(v) - set(RULE_TYPES))
        if unknown:
            raise ValueError(f"Unknown granularity rules: {', '.join(unknown)}")
        return v


class ConflictConfig(BaseModel):
    """Configuration for conflict scanning."""

    max_window: int = Field(default=4, ge=2, le=4)
    debounce_seconds: float = Field(default=0.3, ge=0)


class OutputConfig(BaseModel):
    """Configuration for output options."""

    output_dir: Path = Path("data/segmented_output")
    project_name: str = "Myanmar_Segmentation_Project"
    save_segments_csv: bool = True
    save_conflicts_csv: bool = True


class Config(BaseModel):
    """Main configuration for the segmentation pipeline."""

    input_file: Optional[Path] = None
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    granularity: GranularityConfig = Field(default_factory=GranularityConfig)
    conflicts: ConflictConfig = Field(default_factory=ConflictConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("input_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
