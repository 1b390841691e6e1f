from abc import ABC, abstractmethod
from typing import List
from ..models import NodeRecord, NodeSpec, NodeType


class NodeManager(ABC):
    """
    Abstract interface for node lifecycle management.
    Implementations hold no state of their own: the VM backend is the only
    source of truth.
    """

    @abstractmethod
    def create_nodes(self, node_type: NodeType, spec: NodeSpec) -> None:
        """
        Create spec.count nodes named {cluster}-{node_type}-{1..count}.
        Best effort: per-node failures are logged, not raised.
        """
        pass

    @abstractmethod
    def delete_nodes(self, node_type: NodeType, spec: NodeSpec) -> None:
        """
        Delete nodes 1..spec.count in order, stopping at the first failure.
        """
        pass

    @abstractmethod
    def delete_node(self, name: str) -> None:
        """Delete a single node by name."""
        pass

    @abstractmethod
    def get_node(self, name: str) -> NodeRecord:
        """
        Get the observed state of a node.
        Raises if the node does not exist.
        """
        pass

    @abstractmethod
    def list_nodes(self, cluster_name: str = "") -> List[NodeRecord]:
        """
        Return records of all nodes whose name matches `cluster_name`,
        or of every node when it is empty.
        """
        pass

    @abstractmethod
    def list_names(self, cluster_name: str = "") -> List[str]:
        """
        Return the names of all nodes whose name matches `cluster_name`,
        or of every node when it is empty, without querying their fields.
        """
        pass
