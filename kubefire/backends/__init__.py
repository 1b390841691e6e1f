from .base import NodeManager
from .ignite import IgniteNodeManager

__all__ = ['NodeManager', 'IgniteNodeManager']
