from __future__ import annotations

import json
import os

import pytest

from modulescope.core.config.paths import ConfigFsPaths
from tests.helpers.registry_fakes import snapshot_dict


@pytest.fixture
def tmp_config_root(tmp_path):
    """
    Provides an isolated root with config/ under tmp_path.
    """
    fs = ConfigFsPaths(root=str(tmp_path))
    os.makedirs(fs.config_dir, exist_ok=True)
    return fs


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_dict(), indent=2) + "\n", encoding="utf-8")
    return str(path)
