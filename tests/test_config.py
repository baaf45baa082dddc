import pytest

import config


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    path = tmp_path / ".env"
    monkeypatch.setattr(config, "ENV_FILE", path)
    monkeypatch.setattr(config, "_ENV_CACHE", None)
    return path


def test_read_env_file_skips_junk(tmp_path):
    path = tmp_path / ".env"
    path.write_text("# comment\n\nFOO = bar\nnot a pair\nQUOTED='x y'\n=novalue\n")
    assert config.read_env_file(path) == {"FOO": "bar", "QUOTED": "x y"}


def test_missing_env_file(tmp_path):
    assert config.read_env_file(tmp_path / "absent") == {}


def test_environment_beats_env_file(env_file, monkeypatch):
    env_file.write_text("TREEFLOW_LOG_LEVEL=debug\n")
    monkeypatch.delenv("TREEFLOW_LOG_LEVEL", raising=False)
    assert config.log_level() == "DEBUG"
    monkeypatch.setenv("TREEFLOW_LOG_LEVEL", "error")
    assert config.log_level() == "ERROR"


def test_defaults(env_file, monkeypatch):
    for key in ("TREEFLOW_LOG_LEVEL", "TREEFLOW_ALT_SCREEN", "TREEFLOW_DATA_DIR"):
        monkeypatch.delenv(key, raising=False)
    assert config.log_level() == "WARNING"
    assert config.alt_screen() is True
    assert config.data_dir() == config.PROJECT_ROOT / "data"


def test_alt_screen_can_be_disabled(env_file, monkeypatch):
    monkeypatch.setenv("TREEFLOW_ALT_SCREEN", "off")
    assert config.alt_screen() is False


@pytest.mark.parametrize("value,expected", [(None, True), ("0", False), ("no", False), ("yes", True)])
def test_truthy(value, expected):
    assert config.truthy(value) is expected
