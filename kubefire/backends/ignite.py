import logging
from typing import List, Optional
from ..commands import CommandRenderer
from ..errors import NodeNotFoundError
from ..executor import ProcessExecutor
from ..models import NodeRecord, NodeSpec, NodeType
from ..output_parser import NODE_FIELDS, OutputParser
from .base import NodeManager


class IgniteNodeManager(NodeManager):
    def __init__(self, renderer: Optional[CommandRenderer] = None,
                 executor: Optional[ProcessExecutor] = None,
                 parser: Optional[OutputParser] = None,
                 logger: Optional[logging.Logger] = None):
        self.renderer = renderer or CommandRenderer()
        self.executor = executor or ProcessExecutor()
        self.parser = parser or OutputParser()
        self.logger = logger or logging.getLogger("kubefire.node")

    def create_nodes(self, node_type: NodeType, spec: NodeSpec) -> None:
        node_type = NodeType(node_type)
        self.logger.info("Creating %s nodes of cluster (%s)", node_type.value, spec.cluster)

        # Render everything before launching anything
        invocations = {name: self.renderer.create(spec, name) for name in spec.names(node_type)}

        for name in invocations:
            self.logger.info("Creating node (%s)", name)

        failures = self.executor.launch_all(invocations)
        for name, err in failures.items():
            self.logger.error("Failed to create node (%s): %s", name, err)
        if failures:
            self.logger.warning("%d of %d %s nodes of cluster (%s) failed to create",
                                len(failures), len(invocations), node_type.value, spec.cluster)

    def delete_nodes(self, node_type: NodeType, spec: NodeSpec) -> None:
        node_type = NodeType(node_type)
        self.logger.info("Deleting %s nodes of cluster (%s)", node_type.value, spec.cluster)

        for name in spec.names(node_type):
            self.delete_node(name)

    def delete_node(self, name: str) -> None:
        self.logger.info("Deleting node (%s)", name)
        self.executor.run(self.renderer.delete(name))

    def _exists(self, name: str) -> bool:
        output = self.executor.capture(self.renderer.presence(name))
        return name in self.parser.parse_names(output)

    def get_node(self, name: str) -> NodeRecord:
        self.logger.debug("Getting node (%s)", name)

        if not self._exists(name):
            raise NodeNotFoundError(name)

        node = NodeRecord(name=name)
        for node_field in NODE_FIELDS:
            output = self.executor.capture(self.renderer.field(name, node_field.expression))
            self.parser.apply(node, node_field, output)
        return node

    def list_names(self, cluster_name: str = "") -> List[str]:
        output = self.executor.capture(self.renderer.list(cluster_name))
        return self.parser.parse_names(output)

    def list_nodes(self, cluster_name: str = "") -> List[NodeRecord]:
        self.logger.debug("Listing nodes of cluster (%s)", cluster_name)

        return [self.get_node(name) for name in self.list_names(cluster_name)]
