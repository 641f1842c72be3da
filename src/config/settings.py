# src/config/settings.py - v1
"""Typed configuration loaded from environment / .env via pydantic-settings.

Every knob of a stability run lives here: ensemble size, detector choice and
parameters, pair sampling policy, layout iterations, output naming and
logging. Environment variables use the ``CLUSTERABILITY_`` prefix, e.g.
``CLUSTERABILITY_PASSES=500``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clusterability.core.models import SamplingPolicy

SUPPORTED_EXPORT_FORMATS: frozenset[str] = frozenset({"json", "gexf", "graphml"})


class ConfigurationError(Exception):
    """Raised when configuration values cannot produce a valid run."""


class Settings(BaseSettings):
    """Application settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="CLUSTERABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Ensemble ===
    passes: int = 200
    seed: int | None = None
    workers: int = 1
    keep_pass_labels: bool = False
    pass_label_prefix: str = "louvain_"

    # === Community detection ===
    detector: Literal["louvain", "leiden"] = "louvain"
    resolution: float = 1.0
    louvain_threshold: float = 1e-7
    weight_attribute: str | None = "weight"

    # === Pair sampling ===
    sample_floor: float = 50.0
    sample_log_factor: float = 10.0

    # === Layout ===
    layout_iterations: int = 100

    # === Output ===
    output_suffix: str = "_with_louvains"
    graph_export_formats: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:  # noqa: N805
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Reject values for which statistics or outputs are undefined."""
        errors: list[str] = []

        if self.passes < 1:
            errors.append(f"PASSES must be >= 1 (got {self.passes})")
        if self.workers < 1:
            errors.append(f"WORKERS must be >= 1 (got {self.workers})")
        if self.layout_iterations < 0:
            errors.append(
                f"LAYOUT_ITERATIONS must be >= 0 (got {self.layout_iterations})"
            )
        if self.sample_floor < 0 or self.sample_log_factor < 0:
            errors.append("SAMPLE_FLOOR and SAMPLE_LOG_FACTOR must be >= 0")
        if self.resolution <= 0:
            errors.append(f"RESOLUTION must be > 0 (got {self.resolution})")
        if not self.output_suffix:
            errors.append("OUTPUT_SUFFIX must not be empty (input would be overwritten)")
        if self.keep_pass_labels and not self.pass_label_prefix:
            errors.append("PASS_LABEL_PREFIX must not be empty when KEEP_PASS_LABELS is on")

        unknown = set(self.graph_export_formats_list) - SUPPORTED_EXPORT_FORMATS
        if unknown:
            errors.append(
                f"Unknown GRAPH_EXPORT_FORMATS: {', '.join(sorted(unknown))}"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def graph_export_formats_list(self) -> list[str]:
        """Parse comma-separated extra export formats."""
        return [
            f.strip().lower()
            for f in self.graph_export_formats.split(",")
            if f.strip()
        ]

    @property
    def sampling_policy(self) -> SamplingPolicy:
        """Pair sampling policy built from the sampling fields."""
        return SamplingPolicy(
            floor=self.sample_floor,
            log_factor=self.sample_log_factor,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Args:
        **overrides: Field-level overrides (CLI arguments, tests).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If a value is invalid or the configuration is
            internally inconsistent.
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
