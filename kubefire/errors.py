"""
errors.py: exception hierarchy for kubefire
"""
from typing import List, Optional


class KubefireError(RuntimeError):
    """Base class for all kubefire failures"""


class TemplateError(KubefireError):
    """
    TemplateError: a command template is malformed or a parameter is missing
    or unusable. This is a programming error and is never retried.
    """


class ProcessError(KubefireError):
    """
    ProcessError: an external process failed to start or exited non-zero
    """

    def __init__(self, argv: List[str], returncode: Optional[int] = None, stderr: str = "",
                 reason: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr or ""
        self.reason = reason

        cmd = " ".join(self.argv)
        if returncode is None:
            msg = f"Failed to start: {cmd}"
            if reason:
                msg += f" ({reason})"
        else:
            msg = f"Command failed (exit {returncode}): {cmd}"
        if self.stderr.strip():
            msg += f": {self.stderr.strip()}"
        super().__init__(msg)


class ParseError(KubefireError):
    """ParseError: command output could not be coerced to the expected type"""

    def __init__(self, value: str, kind: str):
        self.value = value
        self.kind = kind
        super().__init__(f"Cannot parse {value!r} as {kind}")


class NodeNotFoundError(KubefireError):
    """NodeNotFoundError: ignite does not know the node"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Node '{name}' not found")


class ConfigError(KubefireError):
    """ConfigError: a configuration file is missing or invalid"""


class ScriptError(KubefireError):
    """ScriptError: an auxiliary script could not be downloaded or found"""
