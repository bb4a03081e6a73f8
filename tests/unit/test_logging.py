"""Unit tests for output and telemetry loggers."""

from unittest.mock import MagicMock

from structlog.testing import capture_logs

from minikube_runner.models import ExecutionFailure, NotFoundError, AssetDescriptor
from minikube_runner.services.telemetry import StructlogTelemetryLogger, report_error, report_usage
from minikube_runner.utils.logging import StructlogOutputLogger, add_service_context


class TestStructlogOutputLogger:
    """Tests for StructlogOutputLogger."""

    def test_stdout_lines(self):
        with capture_logs() as logs:
            StructlogOutputLogger("minikube").log("Starting\n\nDone\n")

        assert [entry["event"] for entry in logs] == ["Starting", "Done"]
        assert all(entry["log_level"] == "info" for entry in logs)
        assert all(entry["stream"] == "stdout" for entry in logs)

    def test_stderr_lines(self):
        with capture_logs() as logs:
            StructlogOutputLogger("minikube").error("E1019 failure\n")

        assert logs[0]["event"] == "E1019 failure"
        assert logs[0]["log_level"] == "warning"


class TestTelemetry:
    """Tests for telemetry helpers."""

    def test_structlog_telemetry(self):
        with capture_logs() as logs:
            StructlogTelemetryLogger().log_usage("createCluster", {"driver": "docker", "runtime": "docker"})

        assert logs[0]["event_name"] == "createCluster"
        assert logs[0]["driver"] == "docker"

    def test_report_usage_swallows_errors(self):
        telemetry = MagicMock()
        telemetry.log_usage.side_effect = RuntimeError("down")

        report_usage(telemetry, "createCluster", {})

        telemetry.log_usage.assert_called_once_with("createCluster", {})

    def test_report_error_swallows_errors(self):
        telemetry = MagicMock()
        telemetry.log_error.side_effect = RuntimeError("down")

        report_error(telemetry, "createCluster", {"error": "boom"})

    def test_no_telemetry(self):
        report_usage(None, "createCluster", {})
        report_error(None, "createCluster", {})


class TestServiceContext:
    """Tests for the service context processor."""

    def test_adds_service_and_version(self):
        event = add_service_context(None, "info", {"event": "x"})

        assert event["service"] == "minikube-runner"
        assert "version" in event


class TestErrors:
    """Tests for error serialization."""

    def test_execution_failure_message_falls_back(self):
        error = ExecutionFailure("minikube", 2, stdout="", stderr="")

        assert error.message == "minikube exited with code 2"
        assert error.to_dict()["exit_code"] == 2

    def test_execution_failure_uses_stdout(self):
        assert ExecutionFailure("minikube", 1, stdout="out\n").message == "out"

    def test_not_found_mentions_asset(self):
        asset = AssetDescriptor("minikube-linux-amd64", "linux", "amd64", "https://example.com/m")

        error = NotFoundError("minikube", asset)

        assert error.to_dict()["error_type"] == "not_found"
        assert "minikube-linux-amd64" in error.message
