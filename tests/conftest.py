# tests/conftest.py
import pytest

from scramble.config.loader import reset_config

@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Points the user data dir at a temp dir and drops any cached config."""
    home = tmp_path / "scramble_home"
    monkeypatch.setenv("SCRAMBLE_HOME", str(home))
    monkeypatch.delenv("SCRAMBLE_SEED", raising=False)
    monkeypatch.delenv("SCRAMBLE_DIGEST", raising=False)
    reset_config()
    yield home
    reset_config()
