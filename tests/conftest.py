import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from noty.app import config


@pytest.fixture(autouse=True)
def config_file(tmp_path, monkeypatch):
    """Point the global config at a throwaway file."""
    path = tmp_path / ".noty_config.json"
    monkeypatch.setattr(config, "GLOBAL_CONFIG", path)
    return path
