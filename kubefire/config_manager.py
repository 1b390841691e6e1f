"""
config_manager.py: module for managing multiple configuration sources
"""
import logging
import os
from pathlib import Path
import yaml
from dotenv import dotenv_values
from typing import Dict, Any, Mapping, Optional
from enum import Enum

from .errors import ConfigError

ENV_PREFIX = "KUBEFIRE_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class ConfigSource(Enum):
    """Enumeration of configuration sources, lowest priority first"""
    DEFAULTS = "defaults"
    GLOBAL_CONFIG = "global_config"  # ~/.config/kubefire/config.yaml
    DOTENV = "dotenv"  # .env file in current directory
    ENVIRONMENT = "environment"  # KUBEFIRE_* environment variables
    COMMAND_LINE = "command_line"  # Command line arguments

DEFAULTS: Dict[str, Any] = {
    "ignite_binary": "ignite",
    "use_sudo": True,
    "max_parallel_creates": 8,
    "strict_parsing": False,
    "log_level": "INFO",
    "version": "master",
    "scripts_dir": str(Path.home() / ".kubefire" / "scripts"),
    "script_base_url": "https://raw.githubusercontent.com/innobead/kubefire",
}

def default_global_path() -> Path:
    return Path.home() / ".config" / "kubefire" / "config.yaml"

def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged

def _coerce(key: str, value: str, default: Any):
    """Convert an environment string to the type of the default value"""
    if isinstance(default, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"{ENV_PREFIX}{key.upper()} must be an integer, got {value!r}") from None
    return value

def validate(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    validate: checks merged settings against the types of the defaults
    and the allowed ranges; raises ConfigError on the first bad value
    """
    for key, default in DEFAULTS.items():
        value = settings.get(key)
        if isinstance(default, bool):
            ok = isinstance(value, bool)
        elif isinstance(default, int):
            ok = isinstance(value, int) and not isinstance(value, bool)
        else:
            ok = isinstance(value, str) and value != ""
        if not ok:
            raise ConfigError(
                f"Setting '{key}' must be a {type(default).__name__}, got {value!r}")

    if settings["max_parallel_creates"] < 1:
        raise ConfigError(
            f"Setting 'max_parallel_creates' must be >= 1, got {settings['max_parallel_creates']}")
    if settings["log_level"].upper() not in LOG_LEVELS:
        raise ConfigError(
            f"Setting 'log_level' must be one of {', '.join(LOG_LEVELS)}, got {settings['log_level']!r}")
    return settings

class ConfigManager:
    """
    ConfigManager: class that merges the configuration sources by priority
    and validates the result
    """

    def __init__(self, global_path: Optional[Path] = None, dotenv_path: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.global_path = global_path or default_global_path()
        self.dotenv_path = dotenv_path or Path.cwd() / ".env"
        self.environ = os.environ if environ is None else environ
        self.logger = logging.getLogger("kubefire.config")

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Load every source in ConfigSource order, `overrides` being the
        command line source, and return the validated settings
        """
        settings: Dict[str, Any] = {}
        for source in ConfigSource:
            settings = _deep_merge(settings, self._load_source(source, overrides))
        return validate(settings)

    def _load_source(self, source: ConfigSource, overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if source == ConfigSource.DEFAULTS:
            return dict(DEFAULTS)
        if source == ConfigSource.GLOBAL_CONFIG:
            return self._load_global_config()
        if source == ConfigSource.DOTENV:
            if not self.dotenv_path.exists():
                return {}
            return self._from_prefixed(dotenv_values(self.dotenv_path))
        if source == ConfigSource.ENVIRONMENT:
            return self._from_prefixed(self.environ)
        return {k: v for k, v in (overrides or {}).items() if v is not None}

    def _load_global_config(self) -> Dict[str, Any]:
        """Load global config from ~/.config/kubefire/config.yaml"""
        if not self.global_path.exists():
            return {}
        try:
            with open(self.global_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load {self.global_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{self.global_path} must contain a mapping")
        return data

    def _from_prefixed(self, values: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        """Pick KUBEFIRE_* variables, e.g. KUBEFIRE_USE_SUDO -> use_sudo"""
        config = {}
        for key, value in values.items():
            if not key.startswith(ENV_PREFIX) or value is None:
                continue
            config_key = key[len(ENV_PREFIX):].lower()
            if config_key in DEFAULTS:
                config[config_key] = _coerce(config_key, value, DEFAULTS[config_key])
            else:
                self.logger.debug("Ignoring unknown setting %s", key)
        return config
