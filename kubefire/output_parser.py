"""
output_parser.py: turns ignite's templated `ps` output into typed values.

Each node field is fetched by its own `ignite ps -t <expression>` call; the
NODE_FIELDS table maps every expression to a coercion function and a setter
on NodeRecord.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

from .errors import ParseError
from .models import NodeRecord

_INT = re.compile(r"[+-]?[0-9]+")
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def clean(output: Union[bytes, str]) -> str:
    """Decode and strip surrounding whitespace, including the trailing newline"""
    if isinstance(output, bytes):
        output = output.decode(errors="replace")
    return output.strip()


def parse_str(value: str) -> str:
    return value


def parse_int(value: str) -> int:
    if not _INT.fullmatch(value):
        raise ParseError(value, "int")
    return int(value)


def parse_bool(value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ParseError(value, "bool")


def _set_cpus(record: NodeRecord, value: int):
    record.spec.cpus = value


def _set_memory(record: NodeRecord, value: str):
    record.spec.memory = value


def _set_disk_size(record: NodeRecord, value: str):
    record.spec.disk_size = value


def _set_running(record: NodeRecord, value: bool):
    record.status.running = value


@dataclass(frozen=True)
class NodeField:
    key: str
    expression: str                             # ignite -t template expression
    coerce: Callable[[str], Any]
    setter: Callable[[NodeRecord, Any], None]


NODE_FIELDS: List[NodeField] = [
    NodeField("cpus", "{{.Spec.CPUs}}", parse_int, _set_cpus),
    NodeField("memory", "{{.Spec.Memory}}", parse_str, _set_memory),
    NodeField("disk_size", "{{.Spec.DiskSize}}", parse_str, _set_disk_size),
    NodeField("running", "{{.Status.Running}}", parse_bool, _set_running),
]


class OutputParser:
    """
    OutputParser: applies captured command output to NodeRecord fields.

    By default coercion is tolerant: a value that does not parse leaves the
    field at its zero value and is only logged, because ignite may omit or
    reformat fields across versions. With strict=True the ParseError is raised.
    """

    def __init__(self, strict: bool = False, logger: Optional[logging.Logger] = None):
        self.strict = strict
        self.logger = logger or logging.getLogger("kubefire.parser")

    def apply(self, record: NodeRecord, node_field: NodeField, output: Union[bytes, str]) -> bool:
        """
        Set `node_field` on `record` from `output`.
        :return: True if the field was set
        """
        value = clean(output)
        try:
            node_field.setter(record, node_field.coerce(value))
        except ParseError as e:
            if self.strict:
                raise
            self.logger.debug("Ignoring %s of node %s: %s", node_field.key, record.name, e)
            return False
        return True

    def parse_names(self, output: Union[bytes, str]) -> List[str]:
        """One node name per line; blank output means no nodes"""
        text = clean(output)
        if not text:
            return []
        return [line.strip() for line in text.splitlines() if line.strip()]
