"""
config.py: module for handling cluster configuration files
"""
import copy
from pathlib import Path
from typing import Any, Dict, List
import yaml

from .errors import ConfigError
from .models import NodeSpec, NodeType

DEFAULT_NODE_CONFIG = {
    "count": 1,
    "cpus": 2,
    "memory": "2GB",
    "disk_size": "10GB",
}

DEFAULT_CLUSTER_CONFIG = {
    "name": "demo",
    "image": "weaveworks/ignite-ubuntu:latest",
    "kernel_image": "weaveworks/ignite-kernel:5.4.43",
    "kernel_args": "",
    "master": dict(DEFAULT_NODE_CONFIG),
    "worker": dict(DEFAULT_NODE_CONFIG, count=0),
}

class ClusterConfig:
    """
    ClusterConfig: class that encapsulate the data of one cluster declaration
    (cluster.yaml) and turns it into node specs
    """
    def __init__(self, path: Path):
        self.path = path
        self.data = copy.deepcopy(DEFAULT_CLUSTER_CONFIG)

    @property
    def name(self) -> str:
        return self.data["name"]

    def load(self):
        """
        load: loads configuration from the cluster file
        """
        if not self.path.exists():
            raise ConfigError(f"Cluster config {self.path} does not exist")
        try:
            loaded = yaml.safe_load(self.path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load {self.path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"{self.path} must contain a mapping")

        for key, value in loaded.items():
            if key in ("master", "worker"):
                if not isinstance(value, dict):
                    raise ConfigError(f"'{key}' in {self.path} must be a mapping")
                self.data[key].update(value)
            else:
                self.data[key] = value
        # fail early on invalid values
        self.node_specs()
        return self

    def node_spec(self, node_type: NodeType) -> NodeSpec:
        node_type = NodeType(node_type)
        node: Dict[str, Any] = self.data[node_type.value]
        try:
            return NodeSpec(
                cluster=str(self.data["name"]),
                image=str(self.data["image"]),
                node_type=node_type,
                count=int(node["count"]),
                kernel_image=str(self.data.get("kernel_image") or ""),
                kernel_args=str(self.data.get("kernel_args") or ""),
                cpus=int(node["cpus"]),
                memory=str(node["memory"]),
                disk_size=str(node["disk_size"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid {node_type.value} settings in {self.path}: {e}") from e

    def node_specs(self) -> List[NodeSpec]:
        """Master spec first, then worker spec"""
        return [self.node_spec(NodeType.MASTER), self.node_spec(NodeType.WORKER)]
