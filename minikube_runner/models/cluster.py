"""Cluster configuration models."""

from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keys used by the host's cluster creation form
PARAM_PREFIX = "minikube.cluster.creation."
PARAM_KEYS = {
    "name": "name",
    "driver": "driver",
    "runtime": "container_runtime",
    "nodes": "node_count",
    "base-image": "base_image",
    "mount-string": "mount_spec",
    "addons": "addons",
}


class ClusterConfig(BaseModel):
    """User configuration for creating a minikube cluster.

    Driver and runtime names are passed through to minikube, which
    validates them itself.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="minikube", description="Profile name")
    driver: str = Field(default="docker")
    container_runtime: str = Field(default="docker")
    node_count: Optional[int] = None
    base_image: Optional[str] = None
    mount_spec: Optional[str] = Field(default=None, description="host-path:vm-path")
    addons: Optional[Union[str, List[str]]] = None

    @field_validator("name", "driver", "container_runtime", mode="before")
    @classmethod
    def default_when_empty(cls, v, info):
        """Blank values fall back to the field default."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("node_count", "base_image", "mount_spec", "addons", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        """Empty optional values are treated as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, (list, tuple)):
            items = [item for item in v if item]
            return items or None
        return v

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ClusterConfig":
        """Build a config from the host's form parameters.

        Args:
            params: Mapping keyed by ``minikube.cluster.creation.<field>``

        Returns:
            ClusterConfig with defaults for missing fields
        """
        values = {}
        for key, field_name in PARAM_KEYS.items():
            value = params.get(PARAM_PREFIX + key)
            if value is not None:
                values[field_name] = value
        return cls(**values)

    @property
    def addons_value(self) -> Optional[str]:
        """Addons as the single value given to ``--addons``."""
        if self.addons is None:
            return None
        if isinstance(self.addons, str):
            return self.addons
        return ",".join(self.addons)
