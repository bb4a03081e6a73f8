"""Unit tests for release asset resolution."""

import pytest

from minikube_runner.config import MinikubeConfig
from minikube_runner.services.minikube import MinikubeReleaseInstaller
from minikube_runner.services.process import Platform


class TestAssetInfo:
    """Tests for get_asset_info."""

    @pytest.mark.asyncio
    async def test_linux_amd64(self):
        installer = MinikubeReleaseInstaller(MinikubeConfig(), Platform.LINUX, "x86_64")

        asset = await installer.get_asset_info()

        assert asset.name == "minikube-linux-amd64"
        assert asset.platform == "linux"
        assert asset.architecture == "amd64"
        assert asset.download_url.endswith("/latest/download/minikube-linux-amd64")
        assert asset.checksum_url == asset.download_url + ".sha256"

    @pytest.mark.asyncio
    async def test_mac_arm64(self):
        installer = MinikubeReleaseInstaller(MinikubeConfig(version="v1.33.1"), Platform.MAC, "arm64")

        asset = await installer.get_asset_info()

        assert asset.name == "minikube-darwin-arm64"
        assert "/download/v1.33.1/" in asset.download_url

    @pytest.mark.asyncio
    async def test_windows_has_exe_suffix(self):
        installer = MinikubeReleaseInstaller(MinikubeConfig(), Platform.WINDOWS, "AMD64")

        asset = await installer.get_asset_info()

        assert asset.name == "minikube-windows-amd64.exe"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "platform,machine",
        [
            (Platform.LINUX, "mips"),
            (Platform.MAC, "armv7l"),
            (Platform.WINDOWS, "s390x"),
        ],
    )
    async def test_unsupported(self, platform, machine):
        installer = MinikubeReleaseInstaller(MinikubeConfig(), platform, machine)

        assert await installer.get_asset_info() is None
