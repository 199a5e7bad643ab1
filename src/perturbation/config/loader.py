"""Settings loader from YAML."""

from pathlib import Path

import yaml

from .schema import Settings


def load_settings(yaml_path: str = None) -> Settings:
    """
    Load settings from YAML file.

    Args:
        yaml_path: Path to YAML file (defaults to defaults.yaml)

    Returns:
        Settings object
    """
    if yaml_path is None:
        yaml_path = Path(__file__).parent / "defaults.yaml"

    with open(yaml_path, 'r') as f:
        data = yaml.safe_load(f)

    return Settings.from_dict(data)

