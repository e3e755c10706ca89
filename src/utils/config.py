"""Configuration loader.

Reads configuration files in YAML format and returns a dictionary.
Configuration files should reside in the `configs/` directory at the
project root; `configs/lanes.yaml` holds the defaults for the batch
runner.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    Parameters
    ----------
    path : str, optional
        Path to the YAML configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Returns an empty dict if no
        path is given, the file does not exist or it is empty.

    Raises
    ------
    yaml.YAMLError
        If the file is not valid YAML.
    ValueError
        If the top level of the file is not a mapping.
    """
    if path is None:
        return {}
    cfg_path = Path(path)
    if not cfg_path.is_file():
        return {}
    with open(cfg_path, 'r', encoding='utf-8') as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Expected a mapping at the top of {cfg_path}, got {type(cfg).__name__}")
    return cfg


def get_section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a named section of a configuration, or an empty dict."""
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section
