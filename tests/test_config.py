"""Configuration loading tests."""

import dataclasses

import pytest

from config import Config, ConfigurationError

SECRETS = {"CHANNEL_SECRET": "secret", "CHANNEL_ACCESS_TOKEN": "token"}


class TestConfigFromEnv:

    def test_defaults(self):
        config = Config.from_env(SECRETS)

        assert config.channel_secret == "secret"
        assert config.channel_access_token == "token"
        assert config.port == 3000
        assert config.host == "0.0.0.0"
        assert config.api_base_url == "https://api.line.me"
        assert config.failure_policy == "fail_all"
        assert config.log_level == "INFO"

    def test_overrides(self):
        config = Config.from_env({
            **SECRETS,
            "PORT": "8080",
            "HOST": "127.0.0.1",
            "LINE_API_BASE_URL": "http://localhost:9000/",
            "EVENT_FAILURE_POLICY": "ISOLATE",
            "LOG_LEVEL": "debug",
        })

        assert config.port == 8080
        assert config.host == "127.0.0.1"
        assert config.api_base_url == "http://localhost:9000"
        assert config.failure_policy == "isolate"
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("missing", ["CHANNEL_SECRET", "CHANNEL_ACCESS_TOKEN"])
    def test_missing_secret(self, missing):
        env = {k: v for k, v in SECRETS.items() if k != missing}

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_env(env)

        assert missing in str(exc_info.value)

    def test_empty_secret_counts_as_missing(self):
        with pytest.raises(ConfigurationError):
            Config.from_env({**SECRETS, "CHANNEL_SECRET": ""})

    def test_all_missing_reported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_env({})

        assert "CHANNEL_SECRET" in str(exc_info.value)
        assert "CHANNEL_ACCESS_TOKEN" in str(exc_info.value)

    @pytest.mark.parametrize("port", ["abc", "0", "70000"])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigurationError):
            Config.from_env({**SECRETS, "PORT": port})

    def test_invalid_policy(self):
        with pytest.raises(ConfigurationError):
            Config.from_env({**SECRETS, "EVENT_FAILURE_POLICY": "retry"})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError):
            Config.from_env({**SECRETS, "LOG_LEVEL": "loud"})


class TestConfigValue:

    def test_immutable(self):
        config = Config.from_env(SECRETS)
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 1

    def test_repr_hides_secrets(self):
        text = repr(Config.from_env(SECRETS))
        assert "secret" not in text
        assert "token" not in text
