"""
Minimum segment durations per mode.

MIN_DURATION_MINUTES:
  FRAMING    30
  EVALUATION 30
  SYNTHESIS  30
  EXECUTION  45  deep work needs more contiguous time
  REFLECTION 20  tolerates brief windows

A segment exactly at its mode's minimum survives filtering.

Loads overrides from config/governor.yaml. Falls back to the defaults
above if the config file is missing.
"""

import logging
from pathlib import Path
from types import MappingProxyType

import yaml

from align import config, paths
from align.types import Mode

logger = logging.getLogger(__name__)

MIN_DURATION_MINUTES: MappingProxyType = MappingProxyType(
    {
        Mode.FRAMING: 30,
        Mode.EVALUATION: 30,
        Mode.SYNTHESIS: 30,
        Mode.EXECUTION: 45,
        Mode.REFLECTION: 20,
    }
)


class ThresholdConfigError(ValueError):
    """Raised when governor.yaml holds an unusable threshold."""


def _load_config(config_path: Path) -> dict:
    """Load YAML config, return empty dict if the file is missing."""
    if not config_path.exists():
        logger.warning("Governor config not found at %s, using defaults", config_path)
        return {}
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def load_thresholds(config_path: Path | None = None) -> dict[Mode, int]:
    """
    Minimum durations with config overrides applied.

    Args:
        config_path: Explicit YAML path; defaults to <config dir>/governor.yaml

    Raises:
        ThresholdConfigError: unknown mode or non-positive minutes in config
    """
    if config_path is None:
        config_path = paths.config_dir() / config.GOVERNOR_CONFIG_FILE

    thresholds = dict(MIN_DURATION_MINUTES)
    overrides = _load_config(config_path).get("min_duration_minutes", {}) or {}

    for mode_name, minutes in overrides.items():
        try:
            mode = Mode(str(mode_name).upper())
        except ValueError as e:
            raise ThresholdConfigError(f"Unknown mode in {config_path}: {mode_name}") from e
        if not isinstance(minutes, int) or isinstance(minutes, bool) or minutes <= 0:
            raise ThresholdConfigError(
                f"min_duration_minutes.{mode_name} must be a positive integer, got {minutes!r}"
            )
        thresholds[mode] = minutes

    return thresholds
