"""
minikube runner CLI.

Usage:
  minikube-runner detect                       # Find a runnable minikube
  minikube-runner create --driver podman       # Create a cluster
  minikube-runner delete --name dev            # Delete a cluster

Output from minikube is streamed through the structured logger. Ctrl-C
cancels the running minikube command, which terminates the process and
reports the cancellation as a failed operation.
"""

import argparse
import asyncio
import signal
import sys
from contextlib import contextmanager

from rich.console import Console

from .config import settings
from .models import ClusterConfig, MinikubeRunnerException, NotFoundError
from .services.cancellation import CancellationTokenSource
from .services.minikube import ClusterLifecycleOrchestrator, MinikubeReleaseInstaller, VersionDetector
from .services.telemetry import StructlogTelemetryLogger
from .utils.logging import StructlogOutputLogger, setup_logging

console = Console(stderr=True)


@contextmanager
def cancel_on_interrupt(source: CancellationTokenSource):
    """Route Ctrl-C to the cancellation token while minikube runs."""
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, source.cancel)
    except NotImplementedError:
        # Windows event loops cannot install signal handlers
        previous = signal.signal(signal.SIGINT, lambda signum, frame: loop.call_soon_threadsafe(source.cancel))
        try:
            yield
        finally:
            signal.signal(signal.SIGINT, previous)
        return

    try:
        yield
    finally:
        loop.remove_signal_handler(signal.SIGINT)


async def resolve_minikube() -> str:
    """Detect minikube, printing the install asset when it is missing."""
    detector = VersionDetector(install_dir=settings.minikube_install_dir)
    try:
        return await detector.detect(settings.minikube_command, MinikubeReleaseInstaller())
    except NotFoundError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        if e.asset is not None:
            console.print(f"Download: {e.asset.download_url}")
        sys.exit(1)


async def cmd_detect(args):
    command = await resolve_minikube()
    console.print(f"[green]minikube:[/green] {command}")


async def cmd_create(args):
    config = ClusterConfig(
        name=args.name,
        driver=args.driver,
        container_runtime=args.runtime,
        node_count=args.nodes,
        base_image=args.base_image,
        mount_spec=args.mount_string,
        addons=args.addons,
    )
    command = await resolve_minikube()

    source = CancellationTokenSource()
    source.cancel_after(args.timeout or settings.cluster_create_timeout)
    try:
        with cancel_on_interrupt(source):
            await ClusterLifecycleOrchestrator().create_cluster(
                config,
                StructlogOutputLogger(command),
                command,
                StructlogTelemetryLogger(),
                source.token,
            )
    finally:
        source.dispose()
    console.print(f"[green]Cluster '{config.name}' created[/green]")


async def cmd_delete(args):
    command = await resolve_minikube()
    source = CancellationTokenSource()
    with cancel_on_interrupt(source):
        await ClusterLifecycleOrchestrator().delete_cluster(
            args.name,
            StructlogOutputLogger(command),
            command,
            StructlogTelemetryLogger(),
            source.token,
        )
    console.print(f"[green]Cluster '{args.name}' deleted[/green]")


def main():
    parser = argparse.ArgumentParser(
        description="minikube runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s detect
  %(prog)s create --name dev --driver podman --runtime cri-o
  %(prog)s create --mount-string /host:/vm --addons ingress,metrics-server
  %(prog)s delete --name dev
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # detect
    subparsers.add_parser("detect", help="Find a runnable minikube")

    # create
    create_p = subparsers.add_parser("create", help="Create a cluster")
    create_p.add_argument("--name", default="minikube", help="Profile name")
    create_p.add_argument("--driver", default="docker", help="Driver (docker, podman, ...)")
    create_p.add_argument("--runtime", default="docker", help="Container runtime")
    create_p.add_argument("--nodes", type=int, help="Number of nodes")
    create_p.add_argument("--base-image", help="Base image for the node")
    create_p.add_argument("--mount-string", help="host-path:vm-path to mount")
    create_p.add_argument("--addons", help="Comma separated addons to enable")
    create_p.add_argument("--timeout", type=int, help="Seconds before cancelling")

    # delete
    delete_p = subparsers.add_parser("delete", help="Delete a cluster")
    delete_p.add_argument("--name", default="minikube", help="Profile name")

    args = parser.parse_args()
    setup_logging()

    handlers = {
        "detect": cmd_detect,
        "create": cmd_create,
        "delete": cmd_delete,
    }

    try:
        asyncio.run(handlers[args.command](args))
    except MinikubeRunnerException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
