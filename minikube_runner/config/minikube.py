"""minikube release configuration.

This module groups the settings that describe which minikube release the
installer points at.
"""

from dataclasses import dataclass


@dataclass
class MinikubeConfig:
    """minikube release configuration."""

    # Release tag used when describing the asset to install
    version: str = "latest"

    release_base_url: str = "https://github.com/kubernetes/minikube/releases"

    def get_release_url(self, asset_name: str) -> str:
        """Get the download URL of a release asset.

        Args:
            asset_name: File name of the asset (e.g. minikube-linux-amd64)

        Returns:
            Download URL for the configured version
        """
        if self.version == "latest":
            return f"{self.release_base_url}/latest/download/{asset_name}"
        return f"{self.release_base_url}/download/{self.version}/{asset_name}"
