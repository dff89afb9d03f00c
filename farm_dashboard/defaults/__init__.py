"""Configuration loader for packaged JSON defaults."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

# Configuration directory
CONFIG_DIR = Path(__file__).parent


def load_config(config_name: str, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load a configuration file by name.

    Args:
        config_name: Name of the config file (without .json extension)
        config_dir: Directory to look in; defaults to this package directory

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> config = load_config('crop_economics')
        >>> config['default']['price']
        5.0
    """
    config_path = (config_dir or CONFIG_DIR) / f"{config_name}.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)

