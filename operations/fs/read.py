from __future__ import annotations

from typing import Any, Dict, List

from tmplkit.core.errors import ArgumentShapeError
from tmplkit.core.operation import ArgumentSpec, ContextOperation, OperationDescriptor

from ._io import PATH_ARG, read_text


MAX_LINES_LIMIT = 10000


class ReadFile(ContextOperation):
    descriptor = OperationDescriptor(
        name="read_file",
        category="filesystem",
        description="Read file contents as string",
        arguments=(PATH_ARG,),
        return_type="string",
        examples=('{{ read_file(path="config.txt") }}',),
    )

    def run(self, args: Dict[str, Any]) -> str:
        path = self.context.require_path(args["path"], operation=self.name)
        return read_text(path, operation=self.name)


class ReadLines(ContextOperation):
    descriptor = OperationDescriptor(
        name="read_lines",
        category="filesystem",
        description="Read lines from a file",
        arguments=(
            PATH_ARG,
            ArgumentSpec(
                name="max_lines",
                type="integer",
                required=False,
                default=10,
                description="Number of lines to read (positive=first N, negative=last N, 0=all)",
            ),
        ),
        return_type="array",
        examples=('{{ read_lines(path="log.txt", max_lines=-5) }}',),
    )

    def run(self, args: Dict[str, Any]) -> List[str]:
        max_lines = int(args["max_lines"])
        if abs(max_lines) > MAX_LINES_LIMIT:
            raise ArgumentShapeError(
                code="argument.shape",
                message=f"{self.name}: max_lines absolute value must be between 0 and {MAX_LINES_LIMIT}, got {max_lines}",
                data={"operation": self.name},
            )
        path = self.context.require_path(args["path"], operation=self.name)
        lines = read_text(path, operation=self.name).splitlines()
        if max_lines == 0:
            return lines
        if max_lines > 0:
            return lines[:max_lines]
        return lines[max_lines:]
