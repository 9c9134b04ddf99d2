"""Test configuration and shared fixtures."""

import numpy as np
import pytest
import yaml
from pathlib import Path

REPO_CONFIG = Path(__file__).parents[1] / "config.yaml"


class FixedRandom:
    """Random source that always draws the same value."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def random(self, size=None):
        self.calls.append(size)
        return np.full(size, self.value, dtype=float)


@pytest.fixture
def midpoint_rng():
    """Draws 0.5 everywhere, so every jitter term is exactly zero."""
    return FixedRandom(0.5)


@pytest.fixture
def low_rng():
    """Draws 0.0 everywhere, pushing every series to the bottom of its band."""
    return FixedRandom(0.0)


@pytest.fixture
def config_dict(tmp_path):
    """Repository config with outputs redirected into a temp directory."""
    with open(REPO_CONFIG, "r") as f:
        config = yaml.safe_load(f)

    config["paths"]["output_folder"] = str(tmp_path / "outputs")
    config["paths"]["plots_folder"] = str(tmp_path / "plots")
    config["paths"]["log_file"] = str(tmp_path / "outputs" / "dashboard.log")
    config["pipeline"]["open_browser"] = False
    return config


@pytest.fixture
def config_file(tmp_path, config_dict):
    """Write config_dict to disk and return its path."""
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(config_dict, f)
    return str(path)
