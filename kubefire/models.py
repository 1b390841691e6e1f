from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, Iterator, List, Optional, Tuple


class NodeType(Enum):
    MASTER = "master"
    WORKER = "worker"


def node_name(cluster: str, node_type: NodeType, ordinal: int) -> str:
    """
    node_name: derives the ignite object name of a node, e.g. "c1-worker-1".
    The same name is used to create, look up and delete the node.
    """
    if ordinal < 1:
        raise ValueError("Ordinal must be >= 1.")
    return f"{cluster}-{NodeType(node_type).value}-{ordinal}"


@dataclass(frozen=True)
class NodeSpec:
    """
    Immutable declaration of a group of identical nodes of one cluster.
    Input of NodeManager.create_nodes() and delete_nodes().
    """
    cluster: str                       # Cluster name, prefix of every node name
    image: str                         # VM image (OCI reference)
    node_type: NodeType = NodeType.WORKER
    count: int = 1
    kernel_image: str = ""
    kernel_args: str = ""
    cpus: int = 1
    memory: str = "1GB"                # e.g. "2GB", "512MB"
    disk_size: str = "10GB"

    def __post_init__(self):
        if not self.cluster or not self.image:
            raise ValueError("Cluster name and image are required.")
        if self.count < 0:
            raise ValueError("Node count must be >= 0.")
        if self.cpus < 1:
            raise ValueError("CPU count must be >= 1.")
        object.__setattr__(self, 'node_type', NodeType(self.node_type))

    def names(self, node_type: Optional[NodeType] = None) -> Iterator[str]:
        """Derived names for ordinals 1..count"""
        node_type = node_type or self.node_type
        for ordinal in range(1, self.count + 1):
            yield node_name(self.cluster, node_type, ordinal)


@dataclass
class NodeResources:
    """Resources ignite reports for a node"""
    cpus: int = 0
    memory: str = ""
    disk_size: str = ""


@dataclass
class NodeStatus:
    running: bool = False


@dataclass
class NodeRecord:
    """
    Observed state of a node, built fresh by every query
    """
    name: str
    spec: NodeResources = field(default_factory=NodeResources)
    status: NodeStatus = field(default_factory=NodeStatus)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Invocation:
    """A single external command: executable plus its ordered arguments"""
    executable: str
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.args]

    def __str__(self):
        return " ".join(self.argv)
