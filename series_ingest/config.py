"""
Configuration models and YAML I/O for series-ingest.

The models map 1:1 to a ``series.yaml`` file, so the timestamp formats and
tokenizer settings for an odd instrument export can be edited by hand
instead of patched into code.

Key models:
- IngestConfig: Top-level config (sources + parser + output).
- ParserConfig: Separator, quote character, timestamp format families,
  year inference toggle and the number of quiet leading lines.
- OutputConfig: Shape of the JSON view handed to downstream consumers.

Key functions:
- load_config(path) -> IngestConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- generate_default_config(sources) -> IngestConfig: Defaults for a file list.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from series_ingest.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

# Format families are tried in this order; earlier entries win, so longer
# patterns go before the ones they contain.
DEFAULT_DATETIME_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S",
]
DEFAULT_TIME_FORMATS = [
    "%H:%M:%S",
    "%H:%M",
]
DEFAULT_DATE_FORMATS = [
    "%a %d %b %Y",
    "%Y-%m-%d",
    "%d/%m/%Y",
]


class ParserConfig(BaseModel):
    """Tokenizer and interpreter settings for one parse invocation."""

    separator: str = Field(",", description="Single field separator character")
    quote: str = Field('"', description="Single quote character wrapping a field")
    datetime_formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DATETIME_FORMATS),
        description="strptime patterns for full date-time stamps, in priority order",
    )
    time_formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TIME_FORMATS),
        description="strptime patterns for time-of-day stamps (placed on 1970-01-01)",
    )
    date_formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DATE_FORMATS),
        description="strptime patterns for date-only stamps (midnight implied)",
    )
    infer_missing_year: bool = Field(
        True,
        description="Retry date formats with the current year appended when no year is given",
    )
    quiet_lines: int = Field(
        2,
        ge=0,
        description="Failures on lines with index <= quiet_lines are not logged",
    )

    @field_validator("separator", "quote")
    @classmethod
    def _check_single_char(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"must be exactly one character, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_quote_differs(self) -> ParserConfig:
        if self.quote == self.separator:
            raise ValueError("quote and separator must be different characters")
        return self


class OutputConfig(BaseModel):
    """Output settings."""

    json_layout: Literal["records", "pairs"] = Field(
        "records",
        description="'records' for {timestamp, value} objects, 'pairs' for [timestamp, value]",
    )


class IngestConfig(BaseModel):
    """Top-level configuration for series-ingest."""

    sources: list[str] = Field(default_factory=list, description="Input file paths")
    parser: ParserConfig = Field(default_factory=ParserConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: str | Path) -> IngestConfig:
    """Load and validate a YAML config into an IngestConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"Config root must be a mapping: {path}")
    logger.info("Loaded config from %s", path)
    return IngestConfig.model_validate(raw)


def save_config(config: IngestConfig, path: str | Path) -> None:
    """Serialize an IngestConfig to YAML with a short header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# series-ingest configuration\n")
        f.write("# Add timestamp formats here for exports the defaults do not cover.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def generate_default_config(sources: list[str]) -> IngestConfig:
    """Build an IngestConfig with default parser settings for *sources*."""
    return IngestConfig(sources=list(sources))
