from __future__ import annotations

from typing import Callable, Dict, List, Tuple

import pytest

from kubefire.backends.ignite import IgniteNodeManager
from kubefire.commands import CommandRenderer
from kubefire.errors import ProcessError
from kubefire.models import Invocation
from kubefire.output_parser import OutputParser


class FakeExecutor:
    """
    Records invocations instead of running them. `respond` produces the
    stdout of captured invocations, `fails` decides which invocations exit
    non-zero.
    """

    def __init__(self):
        self.calls: List[Tuple[str, Invocation]] = []
        self.respond: Callable[[Invocation], bytes] = lambda inv: b""
        self.fails: Callable[[Invocation], bool] = lambda inv: False

    def _check(self, inv: Invocation):
        if self.fails(inv):
            raise ProcessError(inv.argv, 1, "boom")

    def run(self, inv: Invocation) -> None:
        self.calls.append(("run", inv))
        self._check(inv)

    def capture(self, inv: Invocation) -> bytes:
        self.calls.append(("capture", inv))
        self._check(inv)
        return self.respond(inv)

    def launch_all(self, invocations: Dict[str, Invocation]) -> Dict[str, ProcessError]:
        failures = {}
        for label, inv in invocations.items():
            self.calls.append(("launch", inv))
            try:
                self._check(inv)
            except ProcessError as e:
                failures[label] = e
        return failures

    def invocations(self, mode: str) -> List[Invocation]:
        return [inv for m, inv in self.calls if m == mode]


class FakeIgnite:
    """Answers `ignite ps` queries from an in-memory table of nodes"""

    def __init__(self, nodes: Dict[str, Dict[str, str]]):
        self.nodes = nodes

    def __call__(self, inv: Invocation) -> bytes:
        args = list(inv.args)
        template = args[args.index("-t") + 1]
        name_filter = args[args.index("-f") + 1] if "-f" in args else None

        names = list(self.nodes)
        if name_filter:
            _, _, value = name_filter.partition("=")
            if value.startswith("~"):
                names = [n for n in names if value[1:] in n]
            else:
                names = [n for n in names if n == value]

        if template == "{{.ObjectMeta.Name}}":
            return "".join(f"{n}\n" for n in names).encode()
        return "".join(f"{self.nodes[n].get(template, '')}\n" for n in names).encode()


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def manager(executor) -> IgniteNodeManager:
    return IgniteNodeManager(CommandRenderer(), executor, OutputParser())
