"""
commands.py: renders ignite command invocations from argument templates.

Every template is an ordered tuple where each entry becomes exactly one argv
element, so parameter values are never re-split on whitespace. Placeholders
use string.Template syntax ($name) which leaves ignite's go-template braces
such as {{.ObjectMeta.Name}} untouched. An entry starting with "?" is
optional: it is dropped when its parameters are absent or empty.
"""
import re
from string import Template
from typing import Dict, Optional, Tuple

from .errors import TemplateError
from .models import Invocation, NodeSpec

NAME_EXPR = "{{.ObjectMeta.Name}}"

TEMPLATES: Dict[str, Tuple[str, ...]] = {
    "create": (
        "run", "$image",
        "--name=$name",
        "--ssh",
        "?--kernel-image=$kernel_image",
        "?--kernel-args=$kernel_args",
        "--cpus=$cpus",
        "--memory=$memory",
        "--size=$disk_size",
    ),
    "delete": ("rm", "$name", "--force"),
    "presence": ("ps", "--all", "-f", NAME_EXPR + "=$name", "-t", NAME_EXPR),
    "field": ("ps", "--all", "-f", NAME_EXPR + "=$name", "-t", "$field"),
    "list": ("ps", "--all", "-t", NAME_EXPR),
    "list_filtered": ("ps", "--all", "-f", NAME_EXPR + "=~$filter", "-t", NAME_EXPR),
}

# Parameters allowed to carry embedded spaces (still one argv element)
FREE_TEXT_PARAMS = frozenset({"kernel_args", "field"})

_WHITESPACE = re.compile(r"\s")
_CONTROL = re.compile(r"[\x00-\x1f\x7f]")


def _check_param(key: str, text: str) -> str:
    if _CONTROL.search(text):
        raise TemplateError(f"Parameter '{key}' contains control characters: {text!r}")
    if key not in FREE_TEXT_PARAMS and _WHITESPACE.search(text):
        raise TemplateError(f"Parameter '{key}' contains whitespace: {text!r}")
    return text


class CommandRenderer:
    """
    CommandRenderer: turns a named template plus parameters into an Invocation
    of the ignite executable
    """

    def __init__(self, executable: str = "ignite", templates: Optional[Dict[str, Tuple[str, ...]]] = None):
        self.executable = executable
        self.templates = templates if templates is not None else TEMPLATES

    def render(self, template_name: str, **params) -> Invocation:
        """
        Render template `template_name`. None and empty values count as
        missing: they fail required entries and drop optional ones.
        """
        try:
            template = self.templates[template_name]
        except KeyError:
            raise TemplateError(f"Unknown command template '{template_name}'") from None

        checked = {}
        for key, value in params.items():
            if value is None or str(value) == "":
                continue
            checked[key] = _check_param(key, str(value))

        args = []
        for part in template:
            optional = part.startswith("?")
            if optional:
                part = part[1:]
            try:
                args.append(Template(part).substitute(checked))
            except KeyError as e:
                if optional:
                    continue
                raise TemplateError(
                    f"Template '{template_name}' is missing parameter {e.args[0]!r}") from None
            except ValueError as e:
                raise TemplateError(f"Template '{template_name}' is malformed: {e}") from None

        return Invocation(self.executable, tuple(args))

    def create(self, spec: NodeSpec, name: str) -> Invocation:
        return self.render(
            "create",
            image=spec.image,
            name=name,
            kernel_image=spec.kernel_image,
            kernel_args=spec.kernel_args,
            cpus=spec.cpus,
            memory=spec.memory,
            disk_size=spec.disk_size,
        )

    def delete(self, name: str) -> Invocation:
        return self.render("delete", name=name)

    def presence(self, name: str) -> Invocation:
        return self.render("presence", name=name)

    def field(self, name: str, expression: str) -> Invocation:
        return self.render("field", name=name, field=expression)

    def list(self, cluster_filter: str = "") -> Invocation:
        if cluster_filter:
            return self.render("list_filtered", filter=cluster_filter)
        return self.render("list")
