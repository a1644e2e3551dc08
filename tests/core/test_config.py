from pathlib import Path
from core.config import AppConfig

def test_config_defaults(tmp_path):
    cfg = AppConfig(path=tmp_path / "config.json")
    assert cfg.channel == 0
    assert cfg.note == 60
    assert cfg.velocity == 63
    assert cfg.min_velocity == 0
    assert cfg.max_velocity == 127
    assert cfg.random_seed is None
    assert cfg.running_status is False

def test_config_save_and_load(tmp_path):
    path = tmp_path / "config.json"
    cfg = AppConfig(path=path)
    cfg.channel = 9
    cfg.random_seed = 1234
    cfg.running_status = True
    cfg.save()
    cfg2 = AppConfig(path=path)
    assert cfg2.channel == 9
    assert cfg2.random_seed == 1234
    assert cfg2.running_status is True

def test_config_does_not_crash_on_missing_file(tmp_path):
    cfg = AppConfig(path=tmp_path / "nonexistent" / "config.json")
    assert cfg.note == 60

def test_config_ignores_corrupt_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    cfg = AppConfig(path=path)
    assert cfg.velocity == 63

def test_config_default_path():
    cfg = AppConfig()
    assert cfg.path == Path.home() / ".config" / "keyboard-io" / "config.json"
