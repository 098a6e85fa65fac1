"""Tests for configuration loading."""

from pathlib import Path

import yaml

from bookshelf.config import AppConfig, load_config


class TestAppConfigDefaults:
    def test_default_config_creates_successfully(self) -> None:
        config = AppConfig()
        assert config.app.name == "Bookshelf API"
        assert config.app.version == "1.0.0"

    def test_default_server_config(self) -> None:
        config = AppConfig()
        assert config.server.host == "localhost"
        assert config.server.port == 9000
        assert config.server.reload is False

    def test_default_cors_allows_any_origin(self) -> None:
        assert AppConfig().cors.allow_origins == ["*"]

    def test_default_logging_level(self) -> None:
        assert AppConfig().logging.level == "INFO"


class TestLoadConfig:
    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_data = {
            "app": {"name": "Test Shelf"},
            "server": {"port": 8080},
        }
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(yaml_data))

        config = load_config(config_file)
        assert config.app.name == "Test Shelf"
        assert config.server.port == 8080
        # Other fields keep defaults
        assert config.server.host == "localhost"
        assert config.cors.allow_origins == ["*"]

    def test_load_missing_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.server.port == 9000

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(config_file).app.name == "Bookshelf API"

    def test_env_vars_override_yaml(self, tmp_path: Path, monkeypatch) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"server": {"host": "0.0.0.0", "port": 8080}}))

        monkeypatch.setenv("BOOKSHELF_HOST", "127.0.0.1")
        monkeypatch.setenv("BOOKSHELF_PORT", "9100")
        monkeypatch.setenv("BOOKSHELF_LOG_LEVEL", "debug")

        config = load_config(config_file)
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 9100
        assert config.logging.level == "DEBUG"

    def test_load_project_config_yaml(self) -> None:
        """Test loading the project's own config.yaml."""
        config_file = Path(__file__).resolve().parents[1] / "config.yaml"
        config = load_config(config_file)
        assert config.app.name == "Bookshelf API"
        assert config.server.port == 9000
