import ssl

import certifi
import pytest
from pydantic import ValidationError

from httpresource import Config, ConfigurationManager, Priority
from httpresource._utils._ssl_context import (
    ca_bundle,
    create_ssl_context,
    expand_path,
    get_httpx_client_kwargs,
)


class TestConfig:
    def test_defaults(self):
        config = Config.from_env()

        assert config.timeout == 30.0
        assert config.priority == Priority.NORMAL
        assert config.follow_redirects is True
        assert config.disable_ssl_verify is False

    def test_timeout_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HTTPRESOURCE_TIMEOUT", "12.5")

        assert Config.from_env().timeout == 12.5

    def test_invalid_timeout_is_rejected(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HTTPRESOURCE_TIMEOUT", "soon")

        with pytest.raises(ValidationError):
            Config.from_env()

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("high", Priority.HIGH),
            ("VERY_LOW", Priority.VERY_LOW),
            ("8", Priority.VERY_HIGH),
            ("-4", Priority.LOW),
        ],
    )
    def test_priority_from_env(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: Priority
    ):
        monkeypatch.setenv("HTTPRESOURCE_PRIORITY", value)

        assert Config.from_env().priority == expected

    def test_unknown_priority_is_rejected(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HTTPRESOURCE_PRIORITY", "urgent")

        with pytest.raises(ValidationError):
            Config.from_env()

    @pytest.mark.parametrize(
        "value, expected",
        [("1", True), ("true", True), ("Yes", True), ("0", False), ("off", False)],
    )
    def test_flags_from_env(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ):
        monkeypatch.setenv("HTTPRESOURCE_DISABLE_SSL_VERIFY", value)
        monkeypatch.setenv("HTTPRESOURCE_FOLLOW_REDIRECTS", value)

        config = Config.from_env()

        assert config.disable_ssl_verify is expected
        assert config.follow_redirects is expected

    def test_empty_flag_keeps_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HTTPRESOURCE_FOLLOW_REDIRECTS", "")

        assert Config.from_env().follow_redirects is True


class TestConfigurationManager:
    def test_singleton(self):
        assert ConfigurationManager() is ConfigurationManager()

    def test_config_is_cached_until_reset(self, monkeypatch: pytest.MonkeyPatch):
        manager = ConfigurationManager()
        first = manager.config

        monkeypatch.setenv("HTTPRESOURCE_TIMEOUT", "3")
        assert manager.config is first

        manager.reset()
        assert manager.config.timeout == 3.0


class TestClientKwargs:
    def test_verify_uses_ssl_context(self):
        kwargs = get_httpx_client_kwargs(Config(timeout=4.0, follow_redirects=False))

        assert kwargs["timeout"] == 4.0
        assert kwargs["follow_redirects"] is False
        assert isinstance(kwargs["verify"], ssl.SSLContext)

    def test_disable_ssl_verify(self):
        kwargs = get_httpx_client_kwargs(Config(disable_ssl_verify=True))

        assert kwargs["verify"] is False

    def test_create_ssl_context(self):
        assert isinstance(create_ssl_context(), ssl.SSLContext)

    def test_expand_path(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CERT_HOME", "/etc/certs")

        assert expand_path("$CERT_HOME/ca.pem") == "/etc/certs/ca.pem"
        assert expand_path(None) is None

    def test_ca_bundle_defaults_to_certifi(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("SSL_CERT_FILE", raising=False)
        monkeypatch.delenv("REQUESTS_CA_BUNDLE", raising=False)

        assert ca_bundle() == certifi.where()

    def test_ca_bundle_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CERT_HOME", "/etc/certs")
        monkeypatch.setenv("SSL_CERT_FILE", "")
        monkeypatch.setenv("REQUESTS_CA_BUNDLE", "$CERT_HOME/bundle.pem")

        assert ca_bundle() == "/etc/certs/bundle.pem"
