"""Release asset resolution for installing minikube.

Only the query side lives here: which published binary matches this
machine and where it is downloaded from. Fetching and verifying the
binary is left to the host application.
"""

import platform as platform_module
from typing import Optional

import structlog

from ...config import MinikubeConfig, settings
from ...models import AssetDescriptor
from ..interfaces import Installer
from ..process.paths import Platform, current_platform

logger = structlog.get_logger(__name__)

# Machine names reported by the OS mapped to minikube release architectures
ARCHITECTURES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}

# minikube does not publish these combinations
UNSUPPORTED = {
    (Platform.MAC, "arm"),
    (Platform.MAC, "ppc64le"),
    (Platform.MAC, "s390x"),
    (Platform.WINDOWS, "arm"),
    (Platform.WINDOWS, "ppc64le"),
    (Platform.WINDOWS, "s390x"),
}


class MinikubeReleaseInstaller(Installer):
    """Describes the minikube release asset for a platform and architecture."""

    def __init__(
        self,
        config: Optional[MinikubeConfig] = None,
        platform: Optional[Platform] = None,
        machine: Optional[str] = None,
    ):
        self.config = config or settings.minikube
        self.platform = platform or current_platform()
        self.machine = machine or platform_module.machine()

    @property
    def architecture(self) -> Optional[str]:
        return ARCHITECTURES.get(self.machine.lower())

    def asset_name(self) -> Optional[str]:
        """File name of the release asset, or None if unsupported."""
        arch = self.architecture
        if arch is None or (self.platform, arch) in UNSUPPORTED:
            return None
        name = f"minikube-{self.platform.value}-{arch}"
        if self.platform == Platform.WINDOWS:
            name += ".exe"
        return name

    async def get_asset_info(self) -> Optional[AssetDescriptor]:
        name = self.asset_name()
        if name is None:
            logger.warning(
                "No minikube release for this machine",
                platform=self.platform.value,
                machine=self.machine,
            )
            return None

        return AssetDescriptor(
            name=name,
            platform=self.platform.value,
            architecture=self.architecture,
            download_url=self.config.get_release_url(name),
        )
