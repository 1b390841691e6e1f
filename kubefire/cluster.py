"""
cluster.py: Module for planning and executing cluster level operations on top
of a NodeManager, with dry-run support
"""
import logging
from typing import Any, Dict, List, Optional

from .backends.base import NodeManager
from .config import ClusterConfig
from .models import NodeRecord, NodeType


class ClusterManager:
    """
    ClusterManager: creates, deletes and inspects all nodes of a cluster.
    Masters are created before workers and deleted after them.
    """

    def __init__(self, node_manager: NodeManager, logger: Optional[logging.Logger] = None):
        self.node_manager = node_manager
        self.logger = logger or logging.getLogger("kubefire.cluster")

    def build_create_actions(self, cluster: ClusterConfig) -> List[Dict[str, Any]]:
        """
        Build actions for creating every node of the cluster
        :param cluster: Loaded cluster configuration
        :return: List of action dictionaries
        """
        actions = []
        for spec in cluster.node_specs():
            if spec.count == 0:
                continue
            actions.append({
                "desc": f"Create {spec.count} {spec.node_type.value} node(s) of '{spec.cluster}' from '{spec.image}'",
                "func": self.node_manager.create_nodes,
                "args": (spec.node_type, spec),
            })
        return actions

    def build_delete_actions(self, cluster: ClusterConfig) -> List[Dict[str, Any]]:
        actions = []
        for spec in reversed(cluster.node_specs()):
            if spec.count == 0:
                continue
            actions.append({
                "desc": f"Delete {spec.count} {spec.node_type.value} node(s) of '{spec.cluster}'",
                "func": self.node_manager.delete_nodes,
                "args": (spec.node_type, spec),
            })
        return actions

    def execute_actions(self, actions: List[Dict[str, Any]], dry_run: bool = False) -> List[str]:
        """
        Execute a list of actions in order; the first failure propagates and
        the remaining actions are skipped
        :param actions: List of action dictionaries
        :param dry_run: Only report the plan
        :return: Descriptions of the planned actions
        """
        planned = [act["desc"] for act in actions]
        if not actions:
            self.logger.info("Nothing to do")
            return planned

        for desc in planned:
            self.logger.info("Planned: %s", desc)

        if dry_run:
            self.logger.info("DRY RUN: no changes applied")
            return planned

        for act in actions:
            try:
                act["func"](*act.get("args", ()), **act.get("kwargs", {}))
            except Exception:
                self.logger.error("Failed to execute: %s", act["desc"])
                raise
        return planned

    def create(self, cluster: ClusterConfig, dry_run: bool = False) -> List[str]:
        return self.execute_actions(self.build_create_actions(cluster), dry_run)

    def delete(self, cluster: ClusterConfig, dry_run: bool = False) -> List[str]:
        return self.execute_actions(self.build_delete_actions(cluster), dry_run)

    def get(self, name: str) -> List[NodeRecord]:
        """Nodes whose names belong to cluster `name`"""
        prefixes = tuple(f"{name}-{t.value}-" for t in NodeType)
        # the backend filter is a substring match, so drop other clusters
        # before fetching any fields
        members = [n for n in self.node_manager.list_names(name) if n.startswith(prefixes)]
        return [self.node_manager.get_node(n) for n in members]
