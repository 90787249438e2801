import pytest
import yaml

from carves.shared.core.configuration import ENV_MAP, ConfigManager, SystemConfig, ValidationLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_MAP:
        monkeypatch.delenv(key, raising=False)


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_packaged_defaults_load():
    config = ConfigManager().get_config()

    assert config.store.products_collection == "products"
    assert config.store.offline is False
    assert config.ui.app_title == "Yala Carves"
    assert config.ui.primary_color == "#684C2F"


def test_missing_files_fall_back_to_model_defaults(tmp_path):
    assert ConfigManager(tmp_path).get_config() == SystemConfig()


def test_precedence_env_over_project_over_user(tmp_path, monkeypatch):
    write_yaml(tmp_path / "defaults.yaml", {"store": {"timeout": 10.0}})
    write_yaml(tmp_path / "user.yaml", {"store": {"database_url": "https://user.example", "timeout": 20.0}})
    write_yaml(tmp_path / "project.yaml", {"store": {"database_url": "https://project.example"}})
    monkeypatch.setenv("STORE_TIMEOUT", "30")

    config = ConfigManager(tmp_path).get_config()

    assert config.store.database_url == "https://project.example"
    assert config.store.timeout == 30.0

    monkeypatch.setenv("FIREBASE_DATABASE_URL", "https://env.example")
    assert ConfigManager(tmp_path).get_config().store.database_url == "https://env.example"


def test_env_type_conversion(tmp_path, monkeypatch):
    monkeypatch.setenv("STORE_OFFLINE", "yes")
    monkeypatch.setenv("FLET_PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("STORE_TIMEOUT", "soon")

    config = ConfigManager(tmp_path).get_config()

    assert config.store.offline is True
    assert config.ui.flet_port == 9000
    assert config.logging.level == "debug"
    assert config.store.timeout == 15.0


def test_invalid_values_strict_vs_lenient(tmp_path):
    write_yaml(tmp_path / "project.yaml", {"ui": {"flet_port": 80}})
    manager = ConfigManager(tmp_path)

    with pytest.raises(ValueError):
        manager.get_config(ValidationLevel.STRICT)
    assert manager.get_config(ValidationLevel.LENIENT) == SystemConfig()


def test_save_project_config_merges_and_reloads(tmp_path):
    manager = ConfigManager(tmp_path)
    assert manager.save_project_config({"store": {"offline": True}})
    assert manager.save_project_config({"ui": {"app_title": "Carves Test"}})

    config = manager.get_config()
    assert config.store.offline is True
    assert config.ui.app_title == "Carves Test"
    assert yaml.safe_load((tmp_path / "project.yaml").read_text()) == {
        "store": {"offline": True},
        "ui": {"app_title": "Carves Test"},
    }
