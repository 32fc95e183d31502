"""
Tests for configuration loading (paths, YAML, environment overrides).
"""

import logging

import pytest

from cms.configs import (
    DEFAULT_CONFIG,
    create_default_config,
    get_config_path,
    get_full_config,
    get_logger,
    get_timeout,
    load_yaml_config,
    save_yaml_config,
    setup_logging,
)
from cms.configs.paths import get_data_path, get_default_db_path

ENV_VARS = [
    "API_PORT",
    "CMS_DEBUG",
    "ALLOWED_ORIGINS",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "STORAGE_BUCKET",
    "CMS_SERIALIZE_SYNCS",
    "JWT_SECRET",
    "JWT_EXPIRE",
    "CMS_DATABASE_PATH",
]


@pytest.fixture
def data_dir(temp_dir, monkeypatch):
    monkeypatch.setenv("CMS_DATA_PATH", str(temp_dir))
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return temp_dir


class TestPaths:
    def test_data_path_from_env(self, data_dir):
        assert get_data_path() == data_dir

    def test_db_path_default(self, data_dir):
        assert get_default_db_path() == str(data_dir / "cms.sqlite3")

    def test_db_path_override(self, data_dir, monkeypatch):
        monkeypatch.setenv("CMS_DATABASE_PATH", "/tmp/other.sqlite3")
        assert get_default_db_path() == "/tmp/other.sqlite3"


class TestYamlConfig:
    def test_missing_file_is_empty(self, data_dir):
        assert load_yaml_config() == {}

    def test_save_and_load(self, data_dir):
        assert save_yaml_config({"http_port": 8080, "storage": {"bucket": "b"}})
        assert load_yaml_config() == {"http_port": 8080, "storage": {"bucket": "b"}}

    def test_invalid_yaml_is_empty(self, data_dir):
        get_config_path().write_text("http_port: [unclosed")
        assert load_yaml_config() == {}

    def test_default_template_parses(self, data_dir):
        path = create_default_config()
        assert path.exists()
        loaded = load_yaml_config()
        assert loaded["http_port"] == 5000
        assert loaded["storage"]["bucket"] == "resources-images"

    def test_create_default_keeps_existing(self, data_dir):
        save_yaml_config({"http_port": 1234})
        create_default_config()
        assert load_yaml_config() == {"http_port": 1234}


class TestFullConfig:
    def test_defaults(self, data_dir):
        config = get_full_config()

        assert config["http_port"] == DEFAULT_CONFIG["http_port"]
        assert config["storage_bucket"] == "resources-images"
        assert config["serialize_syncs"] is False
        assert config["jwt_secret"] is None
        assert config["supabase_service_key"] is None
        assert config["database_path"] == str(data_dir / "cms.sqlite3")

    def test_yaml_values_applied(self, data_dir):
        save_yaml_config({
            "http_port": 7000,
            "storage": {"url": "https://yaml.supabase.co", "bucket": "yaml-bucket", "serialize_syncs": True},
            "auth": {"token_expire": "2d"},
        })

        config = get_full_config()

        assert config["http_port"] == 7000
        assert config["supabase_url"] == "https://yaml.supabase.co"
        assert config["storage_bucket"] == "yaml-bucket"
        assert config["serialize_syncs"] is True
        assert config["jwt_expire"] == "2d"

    def test_environment_wins(self, data_dir, monkeypatch):
        save_yaml_config({"http_port": 7000, "storage": {"bucket": "yaml-bucket"}})
        monkeypatch.setenv("API_PORT", "9000")
        monkeypatch.setenv("STORAGE_BUCKET", "env-bucket")
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
        monkeypatch.setenv("JWT_SECRET", "secret")
        monkeypatch.setenv("JWT_EXPIRE", "12h")
        monkeypatch.setenv("CMS_SERIALIZE_SYNCS", "true")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.test, https://b.test,")

        config = get_full_config()

        assert config["http_port"] == 9000
        assert config["storage_bucket"] == "env-bucket"
        assert config["supabase_url"] == "https://env.supabase.co"
        assert config["supabase_service_key"] == "service"
        assert config["jwt_secret"] == "secret"
        assert config["jwt_expire"] == "12h"
        assert config["serialize_syncs"] is True
        assert config["allowed_origins"] == ["https://a.test", "https://b.test"]

    def test_bad_port_ignored(self, data_dir, monkeypatch):
        monkeypatch.setenv("API_PORT", "not-a-port")
        assert get_full_config()["http_port"] == DEFAULT_CONFIG["http_port"]

    def test_defaults_not_mutated(self, data_dir, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.test")
        get_full_config()
        assert "https://a.test" not in DEFAULT_CONFIG["allowed_origins"]


class TestTimeouts:
    def test_known_timeout(self):
        assert get_timeout("storage_list") > 0

    def test_unknown_falls_back(self):
        assert get_timeout("nope", default=3.5) == 3.5


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_cms_logger(self):
        yield
        logger = logging.getLogger("cms")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_stderr_only(self):
        logger = setup_logging(debug=False, log_file="")

        assert logger.name == "cms"
        assert logger.level == logging.INFO
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_file_handler_and_quiet_stderr(self, temp_dir):
        log_file = temp_dir / "logs" / "server.log"

        logger = setup_logging(debug=True, log_file=str(log_file))

        assert logger.level == logging.DEBUG
        stderr_handler, file_handler = logger.handlers
        assert stderr_handler.level == logging.WARNING
        assert isinstance(file_handler, logging.FileHandler)
        assert log_file.exists()

    def test_http_client_loggers_quieted(self):
        setup_logging(debug=False, log_file="")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_get_logger_namespacing(self):
        assert get_logger("storage.gc.sync").name == "cms.storage.gc.sync"
