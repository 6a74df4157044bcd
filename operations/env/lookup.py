from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Any, Dict, List

from tmplkit.core.errors import OperationError
from tmplkit.core.operation import ArgumentSpec, ContextOperation, OperationDescriptor


class GetEnv(ContextOperation):
    """Reads the context's environment snapshot (process env plus --env files)."""

    descriptor = OperationDescriptor(
        name="get_env",
        category="environment",
        description="Get an environment variable with an optional default",
        arguments=(
            ArgumentSpec(name="name", type="string", description="Environment variable name"),
            ArgumentSpec(name="default", type="any", required=False, description="Value returned when the variable is not set"),
        ),
        return_type="string",
        examples=('{{ get_env(name="PORT", default="8080") }}',),
    )

    def run(self, args: Dict[str, Any]) -> Any:
        name = args["name"]
        environ = self.context.environ
        if name in environ:
            return environ[name]
        if "default" in args:
            return args["default"]
        raise OperationError(
            code="operation.failed",
            message=f"{self.name}: Environment variable '{name}' not found and no default provided",
            data={"operation": self.name, "name": name},
        )


class FilterEnv(ContextOperation):
    descriptor = OperationDescriptor(
        name="filter_env",
        category="environment",
        description="List environment variables whose names match a glob pattern",
        arguments=(ArgumentSpec(name="pattern", type="string", description='Glob pattern, e.g. "SERVER_*"'),),
        return_type="array",
        examples=('{% for var in filter_env(pattern="SERVER_*") %}{{ var.key }}={{ var.value }}{% endfor %}',),
    )

    def run(self, args: Dict[str, Any]) -> List[Dict[str, str]]:
        pattern = args["pattern"]
        return [
            {"key": key, "value": value}
            for key, value in sorted(self.context.environ.items())
            if fnmatchcase(key, pattern)
        ]
