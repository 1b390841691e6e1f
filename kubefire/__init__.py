from .backends import IgniteNodeManager, NodeManager
from .commands import CommandRenderer
from .errors import (KubefireError, TemplateError, ProcessError, ParseError,
                     NodeNotFoundError, ConfigError, ScriptError)
from .executor import ProcessExecutor
from .models import Invocation, NodeRecord, NodeResources, NodeSpec, NodeStatus, NodeType, node_name
from .output_parser import OutputParser

__all__ = [
    'IgniteNodeManager', 'NodeManager', 'CommandRenderer', 'ProcessExecutor', 'OutputParser',
    'Invocation', 'NodeRecord', 'NodeResources', 'NodeSpec', 'NodeStatus', 'NodeType', 'node_name',
    'KubefireError', 'TemplateError', 'ProcessError', 'ParseError', 'NodeNotFoundError',
    'ConfigError', 'ScriptError',
]
