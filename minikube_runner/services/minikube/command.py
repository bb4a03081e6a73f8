"""Argument vectors for minikube cluster commands."""

from ...models import ClusterConfig, CommandSpec

DEFAULT_EXECUTABLE = "minikube"


class ClusterCommandBuilder:
    """Translates a ClusterConfig into minikube arguments.

    Optional flags follow a fixed order. ``--mount`` and ``--install-addons``
    only enable the flag that follows them, so each is emitted together with
    its value or not at all.
    """

    def __init__(self, executable: str = DEFAULT_EXECUTABLE):
        self.executable = executable

    def start_arguments(self, config: ClusterConfig) -> list[str]:
        args = [
            "start",
            "--profile",
            config.name,
            "--driver",
            config.driver,
            "--container-runtime",
            config.container_runtime,
        ]

        if config.base_image:
            args.extend(["--base-image", config.base_image])
        if config.mount_spec:
            args.extend(["--mount", "--mount-string", config.mount_spec])
        if config.node_count:
            args.extend(["--nodes", str(config.node_count)])

        addons = config.addons_value
        if addons:
            args.extend(["--install-addons", "--addons", addons])

        return args

    def build(self, config: ClusterConfig, executable: str | None = None) -> CommandSpec:
        """Build the ``minikube start`` command for a cluster."""
        return CommandSpec(
            executable=executable or self.executable,
            arguments=tuple(self.start_arguments(config)),
        )

    def build_delete(self, name: str = "minikube", executable: str | None = None) -> CommandSpec:
        """Build the ``minikube delete`` command for a profile."""
        return CommandSpec(
            executable=executable or self.executable,
            arguments=("delete", "--profile", name or "minikube"),
        )

    def build_version(self, executable: str | None = None) -> CommandSpec:
        return CommandSpec(executable=executable or self.executable, arguments=("version",))
