"""
global_config.py purpose is to provide global configuration handler for kubefire
and to build the node manager stack from it
"""
from pathlib import Path
from typing import Any, Dict, Optional

from .backends.ignite import IgniteNodeManager
from .commands import CommandRenderer
from .config_manager import ConfigManager
from .executor import ProcessExecutor
from .output_parser import OutputParser


class KubefireConfig:
    """
    KubefireConfig: class that holds the validated kubefire settings and
    builds the node manager stack from them
    """
    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or ConfigManager()
        self.data: Dict[str, Any] = {}

    def load(self, overrides: Optional[Dict[str, Any]] = None):
        """Load config from defaults, disk, .env and environment, then apply overrides"""
        self.data = self.config_manager.load_config(overrides)
        return self

    @property
    def scripts_dir(self) -> Path:
        return Path(self.data["scripts_dir"]).expanduser()

    def renderer(self) -> CommandRenderer:
        return CommandRenderer(executable=self.data["ignite_binary"])

    def executor(self) -> ProcessExecutor:
        return ProcessExecutor(sudo=self.data["use_sudo"],
                               max_workers=self.data["max_parallel_creates"])

    def parser(self) -> OutputParser:
        return OutputParser(strict=self.data["strict_parsing"])

    def node_manager(self) -> IgniteNodeManager:
        return IgniteNodeManager(self.renderer(), self.executor(), self.parser())
