# tests/config/test_loader.py
import json

from projectshelf.config import loader
from projectshelf.config.paths import get_user_config_file
from projectshelf.config.schema import AppConfig, DEFAULT_EXPLORER_URL


def test_defaults_without_config_file():
    config = loader.load_config()
    assert config.backend == "supabase"
    assert config.explorer_base_url == DEFAULT_EXPLORER_URL
    assert config.owner_id is None

def test_reads_config_file():
    get_user_config_file().write_text(json.dumps({"owner_id": "alice", "projects_table": "saved"}), encoding="utf-8")
    config = loader.load_config()
    assert config.owner_id == "alice"
    assert config.projects_table == "saved"

def test_config_is_cached():
    assert loader.get_config() is loader.get_config()

def test_corrupt_file_is_backed_up():
    config_file = get_user_config_file()
    config_file.write_text("{not json", encoding="utf-8")
    config = loader.load_config()
    assert config == AppConfig()
    assert config_file.with_suffix(".json.corrupted").exists()
    assert not config_file.exists()

def test_invalid_values_fall_back_to_defaults():
    get_user_config_file().write_text(json.dumps({"request_timeout": -5}), encoding="utf-8")
    assert loader.load_config() == AppConfig()

def test_environment_overrides_file(monkeypatch):
    get_user_config_file().write_text(json.dumps({"owner_id": "alice"}), encoding="utf-8")
    monkeypatch.setenv("PROJECTSHELF_OWNER_ID", "bob")
    monkeypatch.setenv("PROJECTSHELF_REQUEST_TIMEOUT", "2.5")
    config = loader.load_config()
    assert config.owner_id == "bob"
    assert config.request_timeout == 2.5

def test_save_then_load():
    loader.save_config(AppConfig(owner_id="carol", backend="memory"))
    loader.reset_config_cache()
    config = loader.load_config()
    assert config.owner_id == "carol"
    assert config.backend == "memory"
    assert not list(get_user_config_file().parent.glob(".config.json_tmp*"))
