"""Configuration management for the farm dashboard.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base package directory - assumes this file is in farm_dashboard/
_PACKAGE_DIR = Path(__file__).parent.resolve()
DEFAULTS_DIR = _PACKAGE_DIR / "defaults"

# Seed records loaded into the in-memory stores
DATA_FILE = Path(
    os.getenv("FARMAPP_DATA_FILE", DEFAULTS_DIR / "sample_data.json")
).resolve()

# Crop name -> base yield / price lookup table
CROP_ECONOMICS_FILE = Path(
    os.getenv("FARMAPP_CROP_ECONOMICS", DEFAULTS_DIR / "crop_economics.json")
).resolve()

# Used by the expenses view when no budget record matches the selection
DEFAULT_TOTAL_BUDGET = float(os.getenv("FARMAPP_DEFAULT_TOTAL_BUDGET", "50000"))

LOG_LEVEL = os.getenv("FARMAPP_LOG_LEVEL", "WARNING").upper()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and the dashboard."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_data_file() -> str:
    """Get the seed data file as a string."""
    return str(DATA_FILE)


def get_default_total_budget() -> float:
    """Fallback total budget for views with no matching budget record."""
    return DEFAULT_TOTAL_BUDGET
