"""
Tests for the Deta entry point and configuration in DetaKit

Tests project key resolution, endpoint overrides and the config manager.
"""

import json

import pytest

from detakit import Deta, Base, Drive
from detakit.exceptions import ErrorKind, DetaValidationError
from detakit.managers import ConfigManager, DEFAULT_CONFIG


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.delenv("DETA_PROJECT_KEY", raising=False)
    monkeypatch.delenv("DETA_BASE_ROOT_ENDPOINT", raising=False)
    monkeypatch.delenv("DETA_DRIVE_ROOT_ENDPOINT", raising=False)
    manager = ConfigManager(tmp_path / "detakit.json")
    manager.load_config()
    return manager


@pytest.fixture
def fake_keyring(monkeypatch):
    import keyring

    store = {}
    monkeypatch.setattr(keyring, "set_password", lambda service, user, password: store.__setitem__((service, user), password))
    monkeypatch.setattr(keyring, "get_password", lambda service, user: store.get((service, user)))
    return store


def test_explicit_project_key(config):
    """Test the project id is the part before the underscore"""
    deta = Deta("abc123_secret", config_manager=config)

    assert deta.project_id == "abc123"
    assert deta.project_key == "abc123_secret"


def test_project_key_from_environment(config, monkeypatch):
    """Test DETA_PROJECT_KEY is used when no key is passed"""
    monkeypatch.setenv("DETA_PROJECT_KEY", "envproject_secret")

    assert Deta(config_manager=config).project_id == "envproject"


def test_project_key_from_credential_store(config, fake_keyring, monkeypatch):
    """Test a stored project key is used as the last resort"""
    config.store_project_key("stored_secret")

    assert fake_keyring[("DetaKit", "stored")] == "stored_secret"
    assert Deta(config_manager=config).project_key == "stored_secret"


@pytest.mark.parametrize("key", ["nounderscore", "too_many_parts", ""])
def test_bad_project_key(config, fake_keyring, key):
    """Test keys that do not split into two parts are rejected"""
    with pytest.raises(DetaValidationError) as exc_info:
        Deta(key, config_manager=config)

    assert exc_info.value.kind is ErrorKind.BAD_PROJECT_KEY


def test_default_endpoints(config):
    """Test Base and Drive handles are bound to project and name"""
    deta = Deta("proj_secret", config_manager=config)

    base = deta.Base("users")
    drive = deta.Drive("photos")

    assert isinstance(base, Base)
    assert isinstance(drive, Drive)
    assert base.client.root_endpoint == "https://database.deta.sh/v1/proj/users"
    assert drive.client.root_endpoint == "https://drive.deta.sh/v1/proj/photos"
    assert base.client.api_key == "proj_secret"


def test_endpoint_overrides(config, monkeypatch):
    """Test environment endpoints win over the config file"""
    config.set("base_endpoint", "http://file.base")
    monkeypatch.setenv("DETA_DRIVE_ROOT_ENDPOINT", "http://env.drive")

    deta = Deta("proj_secret", config_manager=config)

    assert deta.Base("b").client.root_endpoint == "http://file.base/proj/b"
    assert deta.Drive("d").client.root_endpoint == "http://env.drive/proj/d"


def test_empty_service_names(config):
    """Test empty Base and Drive names are rejected"""
    deta = Deta("proj_secret", config_manager=config)

    with pytest.raises(DetaValidationError) as exc_info:
        deta.Base("")
    assert exc_info.value.kind is ErrorKind.BAD_BASE_NAME

    with pytest.raises(DetaValidationError) as exc_info:
        deta.Drive("")
    assert exc_info.value.kind is ErrorKind.BAD_DRIVE_NAME


def test_config_file_round_trip(tmp_path):
    """Test saved values are merged with defaults on load"""
    config_file = tmp_path / "detakit.json"
    config_file.write_text(json.dumps({"log_level": "DEBUG"}))

    manager = ConfigManager(config_file)
    loaded = manager.load_config()

    assert loaded["log_level"] == "DEBUG"
    assert loaded["drive_endpoint"] == DEFAULT_CONFIG["drive_endpoint"]

    manager.set("project_id", "abc")
    assert json.loads(config_file.read_text())["project_id"] == "abc"


def test_missing_config_file_is_not_created(tmp_path):
    """Test loading without a config file uses defaults and writes nothing"""
    config_file = tmp_path / "missing.json"

    assert ConfigManager(config_file).load_config() == DEFAULT_CONFIG
    assert not config_file.exists()


def test_no_stored_key(config, fake_keyring):
    """Test no project id means no stored key"""
    assert config.get_project_key() is None
