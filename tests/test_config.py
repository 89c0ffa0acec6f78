"""Tests for settings and the agent entry point."""
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from logrelay.agent import cli
from logrelay.agent.runner import ShippingOutcome, ShippingResult
from logrelay.config import get_agent_settings, get_app_settings
from logrelay.settings.agent import AgentSettings
from logrelay.settings.base import BaseAppSettings
from logrelay.settings.dev import DevAppSettings

AGENT_ENV = ("ENDPOINT_URL", "LOG_SECRET", "POLL_INTERVAL", "FAILURE_THRESHOLD",
             "REQUEST_TIMEOUT", "GITHUB_REPOSITORY", "GITHUB_TOKEN")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in AGENT_ENV + ("LOG_RELAY_ENVIRONMENT",):
        monkeypatch.delenv(name, raising=False)
    get_agent_settings.cache_clear()
    get_app_settings.cache_clear()
    yield
    get_agent_settings.cache_clear()
    get_app_settings.cache_clear()


@pytest.fixture
def agent_env(monkeypatch):
    monkeypatch.setenv("ENDPOINT_URL", "https://collector.example.com/api/v1.0/logs")
    monkeypatch.setenv("LOG_SECRET", "s3cr3t")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/repo")


class TestAgentSettings:
    def test_defaults(self, agent_env):
        settings = AgentSettings()
        assert settings.poll_interval == 15
        assert settings.failure_threshold == 3
        assert settings.timeout == 15
        assert settings.log_secret.get_secret_value() == "s3cr3t"

    def test_explicit_timeout(self, agent_env, monkeypatch):
        monkeypatch.setenv("POLL_INTERVAL", "5")
        monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
        assert AgentSettings().timeout == 2.5

    def test_secret_is_required(self, monkeypatch):
        monkeypatch.setenv("ENDPOINT_URL", "https://collector.example.com")
        with pytest.raises(ValidationError):
            AgentSettings()

    def test_empty_secret_rejected(self, agent_env, monkeypatch):
        monkeypatch.setenv("LOG_SECRET", "")
        with pytest.raises(ValidationError):
            AgentSettings()

    @pytest.mark.parametrize("name, value", [("POLL_INTERVAL", "0"), ("FAILURE_THRESHOLD", "0")])
    def test_bounds(self, agent_env, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            AgentSettings()


class TestAppSettings:
    def test_secret_optional(self):
        assert BaseAppSettings().log_secret is None

    def test_secret_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_SECRET", "s3cr3t")
        assert BaseAppSettings().log_secret.get_secret_value() == "s3cr3t"

    def test_environment_selection(self, monkeypatch):
        monkeypatch.setenv("LOG_RELAY_ENVIRONMENT", "dev")
        assert isinstance(get_app_settings(), DevAppSettings)

    def test_redis_url(self):
        settings = BaseAppSettings(redis_user="u", redis_pass="p", redis_host="cache", redis_port=6380)
        assert settings.redis_url == "redis://u:p@cache:6380/0"


class TestCli:
    def test_missing_configuration(self):
        assert cli.main(["42"]) == 2

    def test_missing_repository(self, agent_env, monkeypatch):
        monkeypatch.delenv("GITHUB_REPOSITORY")
        assert cli.main(["42"]) == 2

    @pytest.mark.parametrize("outcome, code", [
        (ShippingOutcome.COMPLETED, 0),
        (ShippingOutcome.STOPPED, 0),
        (ShippingOutcome.FAILED, 1),
        (ShippingOutcome.CANCELLED, 1),
        (ShippingOutcome.ABORTED, 2),
    ])
    def test_exit_codes(self, agent_env, outcome, code):
        result = ShippingResult(job_id="42", outcome=outcome)
        with patch.object(cli.ShippingAgent, "run", return_value=result) as run, \
                patch.object(cli.signal, "signal"):
            assert cli.main(["42"]) == code
        run.assert_called_once_with("42")
