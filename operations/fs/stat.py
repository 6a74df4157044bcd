from __future__ import annotations

from typing import Any, Dict

from tmplkit.core.operation import ContextOperation, OperationDescriptor

from ._io import PATH_ARG, stat


class FileExists(ContextOperation):
    descriptor = OperationDescriptor(
        name="file_exists",
        category="filesystem",
        description="Check if a file or directory exists",
        arguments=(PATH_ARG,),
        return_type="boolean",
        examples=('{% if file_exists(path="config.json") %}Config found{% endif %}',),
    )

    def run(self, args: Dict[str, Any]) -> bool:
        return self.context.require_path(args["path"], operation=self.name).exists()


class FileSize(ContextOperation):
    descriptor = OperationDescriptor(
        name="file_size",
        category="filesystem",
        description="Get file size in bytes",
        arguments=(PATH_ARG,),
        return_type="integer",
        examples=('{{ file_size(path="data.bin") }}',),
    )

    def run(self, args: Dict[str, Any]) -> int:
        path = self.context.require_path(args["path"], operation=self.name)
        return stat(path, operation=self.name).st_size


class FileModified(ContextOperation):
    descriptor = OperationDescriptor(
        name="file_modified",
        category="filesystem",
        description="Get file modification timestamp (Unix epoch seconds)",
        arguments=(PATH_ARG,),
        return_type="integer",
        examples=('{{ file_modified(path="data.txt") }}',),
    )

    def run(self, args: Dict[str, Any]) -> int:
        path = self.context.require_path(args["path"], operation=self.name)
        return int(stat(path, operation=self.name).st_mtime)
