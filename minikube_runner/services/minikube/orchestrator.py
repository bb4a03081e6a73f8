"""Cluster lifecycle operations - create and delete minikube clusters."""

from typing import Any, Mapping, Optional, Type, Union

import structlog
from pydantic import ValidationError

from ...models import ClusterConfig, ClusterCreationError, ClusterDeletionError, ClusterOperationError, CommandSpec
from ...models.cluster import PARAM_PREFIX
from ..interfaces import CancellationToken, TelemetryLogger
from ..process import ProcessRunner, additional_environment, get_process_runner
from ..telemetry import report_error, report_usage
from .command import ClusterCommandBuilder

logger = structlog.get_logger(__name__)


class ClusterLifecycleOrchestrator:
    """Runs minikube cluster commands end to end.

    A failed attempt is terminal: no retries are made, the failure is
    reported to telemetry and raised wrapped with the underlying message.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        builder: Optional[ClusterCommandBuilder] = None,
    ):
        self.runner = runner or get_process_runner()
        self.builder = builder or ClusterCommandBuilder()

    async def create_cluster(
        self,
        config: Union[ClusterConfig, Mapping[str, Any]],
        output_logger: Optional[Any],
        tool_command: str,
        telemetry: Optional[TelemetryLogger],
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Create a cluster with ``minikube start``.

        Args:
            config: ClusterConfig or the host's form parameters
            output_logger: Receives minikube output as it arrives
            tool_command: minikube command token (from detection)
            telemetry: Usage and error reporting
            token: Optional cancellation token

        Raises:
            ClusterCreationError: minikube could not start, failed or was cancelled
        """
        if not isinstance(config, ClusterConfig):
            try:
                config = ClusterConfig.from_params(config)
            except ValidationError as e:
                attributes = {
                    "driver": config.get(PARAM_PREFIX + "driver"),
                    "runtime": config.get(PARAM_PREFIX + "runtime"),
                }
                message = "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
                raise self._failed(message, message, telemetry, "createCluster", attributes, ClusterCreationError) from e

        spec = self.builder.build(config, executable=tool_command)
        attributes = {"driver": config.driver, "runtime": config.container_runtime}

        logger.info(
            "Creating minikube cluster",
            profile=config.name,
            driver=config.driver,
            runtime=config.container_runtime,
        )
        await self._run(spec, output_logger, token, telemetry, "createCluster", attributes, ClusterCreationError)
        logger.info("minikube cluster created", profile=config.name)

    async def delete_cluster(
        self,
        name: str,
        output_logger: Optional[Any],
        tool_command: str,
        telemetry: Optional[TelemetryLogger],
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Delete a cluster profile with ``minikube delete``.

        Raises:
            ClusterDeletionError: the deletion did not succeed
        """
        spec = self.builder.build_delete(name, executable=tool_command)
        logger.info("Deleting minikube cluster", profile=name)
        await self._run(spec, output_logger, token, telemetry, "deleteCluster", {"profile": name}, ClusterDeletionError)
        logger.info("minikube cluster deleted", profile=name)

    async def _run(
        self,
        spec: CommandSpec,
        output_logger: Optional[Any],
        token: Optional[CancellationToken],
        telemetry: Optional[TelemetryLogger],
        event_name: str,
        attributes: dict,
        error_class: Type[ClusterOperationError],
    ) -> None:
        spec = spec.with_environment(**additional_environment(self.runner.platform))
        try:
            outcome = await self.runner.run_spec(spec, output_logger=output_logger, token=token)
            outcome.raise_for_status(spec.executable)
        except Exception as e:
            message = getattr(e, "message", None) or str(e)
            stderr = getattr(e, "stderr", None) or message
            raise self._failed(message, stderr, telemetry, event_name, attributes, error_class) from e

        report_usage(telemetry, event_name, attributes)

    def _failed(
        self,
        message: str,
        stderr: str,
        telemetry: Optional[TelemetryLogger],
        event_name: str,
        attributes: dict,
        error_class: Type[ClusterOperationError],
    ) -> ClusterOperationError:
        """Report a failed operation and build the error to raise."""
        report_error(telemetry, event_name, {**attributes, "error": message, "stderr": stderr})
        logger.error("minikube command failed", event_name=event_name, error=message)
        return error_class(message)


async def create_cluster(
    params: Union[ClusterConfig, Mapping[str, Any]],
    output_logger: Optional[Any],
    minikube_cli: str,
    telemetry: Optional[TelemetryLogger],
    token: Optional[CancellationToken] = None,
) -> None:
    """Create a cluster with the shared process runner."""
    await ClusterLifecycleOrchestrator().create_cluster(params, output_logger, minikube_cli, telemetry, token)


async def delete_cluster(
    name: str,
    output_logger: Optional[Any],
    minikube_cli: str,
    telemetry: Optional[TelemetryLogger],
    token: Optional[CancellationToken] = None,
) -> None:
    """Delete a cluster with the shared process runner."""
    await ClusterLifecycleOrchestrator().delete_cluster(name, output_logger, minikube_cli, telemetry, token)
