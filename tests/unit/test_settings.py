"""Unit tests for Settings.

Tests that the Settings class reads and validates configuration values.
"""

import pytest
from pydantic import ValidationError

from minikube_runner.config import MinikubeConfig, Settings


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        settings = Settings()

        assert settings.minikube_command == "minikube"
        assert settings.minikube_version == "latest"
        assert settings.cluster_create_timeout == 300
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MINIKUBE_RUNNER_MINIKUBE_COMMAND", "/opt/bin/minikube")
        monkeypatch.setenv("MINIKUBE_RUNNER_CLUSTER_CREATE_TIMEOUT", "600")

        settings = Settings()

        assert settings.minikube_command == "/opt/bin/minikube"
        assert settings.cluster_create_timeout == 600


class TestValidators:
    """Tests for field validators."""

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="verbose")

        assert any("log_level" in str(e) for e in exc_info.value.errors())

    def test_rejects_unknown_log_format(self):
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_version_gets_v_prefix(self):
        assert Settings(minikube_version="1.32.0").minikube_version == "v1.32.0"
        assert Settings(minikube_version="v1.32.0").minikube_version == "v1.32.0"

    def test_rejects_zero_timeout(self):
        with pytest.raises(ValidationError):
            Settings(cluster_create_timeout=0)


class TestGroupedAccess:
    """Tests for grouped config views."""

    def test_minikube_group(self):
        settings = Settings(minikube_version="1.33.1", minikube_release_base_url="https://mirror.example.com/minikube")

        group = settings.minikube

        assert isinstance(group, MinikubeConfig)
        assert group.version == "v1.33.1"
        assert group.get_release_url("minikube-linux-amd64") == (
            "https://mirror.example.com/minikube/download/v1.33.1/minikube-linux-amd64"
        )

    def test_logging_group(self):
        group = Settings(log_format="json").logging

        assert group.format == "json"
        assert group.level == "INFO"

    def test_release_url_latest(self):
        config = MinikubeConfig()

        assert config.get_release_url("minikube-linux-amd64") == (
            "https://github.com/kubernetes/minikube/releases/latest/download/minikube-linux-amd64"
        )

    def test_release_url_pinned(self):
        config = MinikubeConfig(version="v1.32.0")

        assert config.get_release_url("minikube-darwin-arm64") == (
            "https://github.com/kubernetes/minikube/releases/download/v1.32.0/minikube-darwin-arm64"
        )
