"""minikube detection.

Detection is a fast local pre-flight: run ``<command> version`` and, only
if that fails, ask the installer which release asset would be needed. The
common already-installed case never touches the network.
"""

from pathlib import Path
from typing import Optional

import structlog

from ...config import settings
from ...models import AssetDescriptor, NotFoundError
from ..interfaces import Installer
from ..process import ProcessRunner, additional_environment, get_process_runner, quote_for_platform
from ..process.paths import Platform
from .command import ClusterCommandBuilder

logger = structlog.get_logger(__name__)


class VersionDetector:
    """Resolves a runnable minikube command token."""

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        install_dir: Optional[str] = None,
        builder: Optional[ClusterCommandBuilder] = None,
    ):
        """Initialize the detector.

        Args:
            runner: Process runner used for ``version`` probes
            install_dir: Directory holding a managed minikube binary, if any
            builder: Builds the ``version`` command
        """
        self.runner = runner or get_process_runner()
        self.install_dir = install_dir
        self.builder = builder or ClusterCommandBuilder()

    async def detect(self, candidate_command: str = "minikube", installer: Optional[Installer] = None) -> str:
        """Find a runnable minikube.

        Args:
            candidate_command: Command tried through the search PATH
            installer: Queried for the release asset when the command fails

        Returns:
            Platform quoted command token

        Raises:
            NotFoundError: minikube is not available; carries the asset to install
        """
        candidate_command = candidate_command or "minikube"
        if await self._responds(candidate_command):
            return quote_for_platform(candidate_command, self.runner.platform)

        if installer is None:
            raise NotFoundError(candidate_command)

        asset = await installer.get_asset_info()
        installed = await self._find_installed(asset)
        if installed:
            return installed

        logger.info(
            "minikube not found",
            command=candidate_command,
            asset=asset.name if asset else None,
        )
        raise NotFoundError(candidate_command, asset)

    async def _responds(self, command: str) -> bool:
        spec = self.builder.build_version(command).with_environment(**additional_environment(self.runner.platform))
        outcome = await self.runner.run_spec(spec)
        if not outcome.ok:
            logger.debug("Version probe failed", command=command, status=outcome.status.value)
        return outcome.ok

    async def _find_installed(self, asset: Optional[AssetDescriptor]) -> Optional[str]:
        if asset is None or not self.install_dir:
            return None

        binary = "minikube.exe" if self.runner.platform == Platform.WINDOWS else "minikube"
        for name in (binary, asset.name):
            path = Path(self.install_dir) / name
            if path.is_file() and await self._responds(str(path)):
                logger.info("Using installed minikube", path=str(path))
                return quote_for_platform(str(path), self.runner.platform)
        return None


async def detect_minikube(
    installer: Optional[Installer] = None,
    candidate_command: Optional[str] = None,
    install_dir: Optional[str] = None,
) -> str:
    """Detect minikube with the configured command and install directory."""
    detector = VersionDetector(install_dir=install_dir or settings.minikube_install_dir)
    return await detector.detect(candidate_command or settings.minikube_command, installer)
