from __future__ import annotations

import os
import posixpath
from typing import Any, Dict

from tmplkit.core.errors import ArgumentShapeError
from tmplkit.core.operation import FUNCTION_AND_FILTER, ArgumentSpec, Operation, OperationDescriptor


# Pure string manipulation on path text; nothing here touches the filesystem.
_PATH_ARG = ArgumentSpec(name="path", type="string", description="Path text")


class Basename(Operation):
    descriptor = OperationDescriptor(
        name="basename",
        category="path",
        description="Final component of a path",
        arguments=(_PATH_ARG,),
        examples=('{{ "dir/file.txt" | basename }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        return posixpath.basename(args["path"].rstrip("/")) or args["path"]


class Dirname(Operation):
    descriptor = OperationDescriptor(
        name="dirname",
        category="path",
        description="Path without its final component",
        arguments=(_PATH_ARG,),
        examples=('{{ "dir/file.txt" | dirname }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        return posixpath.dirname(args["path"])


class FileExtension(Operation):
    descriptor = OperationDescriptor(
        name="file_extension",
        category="path",
        description="Extension of the final component, without the dot",
        arguments=(_PATH_ARG,),
        examples=('{{ "archive.tar.gz" | file_extension }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        return posixpath.splitext(posixpath.basename(args["path"]))[1].lstrip(".")


class JoinPath(Operation):
    descriptor = OperationDescriptor(
        name="join_path",
        category="path",
        description="Join path components with '/'",
        arguments=(ArgumentSpec(name="parts", type="array", description="Components to join"),),
        examples=('{{ ["a", "b", "c.txt"] | join_path }}', '{{ join_path(parts=["a", "b"]) }}'),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        parts = args["parts"]
        if not all(isinstance(p, str) for p in parts):
            raise ArgumentShapeError(
                code="argument.shape",
                message=f"{self.name}: parts must all be strings",
                data={"operation": self.name},
            )
        if not parts:
            return ""
        return posixpath.join(*parts)


class NormalizePath(Operation):
    descriptor = OperationDescriptor(
        name="normalize_path",
        category="path",
        description="Collapse '.', '..' and duplicate separators in path text",
        arguments=(_PATH_ARG,),
        examples=('{{ "a/./b/../c" | normalize_path }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        return os.path.normpath(args["path"]).replace(os.sep, "/")
