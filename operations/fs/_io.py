from __future__ import annotations

import os
from pathlib import Path

from tmplkit.core.errors import ResourceNotFound, ResourceUnreadable
from tmplkit.core.operation import ArgumentSpec


PATH_ARG = ArgumentSpec(name="path", type="string", description="Path relative to the template directory")


def _unreadable(operation: str, path: Path, err: Exception) -> ResourceUnreadable:
    return ResourceUnreadable(
        code="resource.unreadable",
        message=f"{operation}: Failed to read '{path}': {err}",
        data={"operation": operation, "path": str(path)},
    )


def not_found(operation: str, path: Path) -> ResourceNotFound:
    return ResourceNotFound(
        code="resource.not_found",
        message=f"{operation}: No such file or directory: '{path}'",
        data={"operation": operation, "path": str(path)},
    )


def read_text(path: Path, *, operation: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise not_found(operation, path) from None
    except (IsADirectoryError, PermissionError, UnicodeDecodeError) as e:
        raise _unreadable(operation, path, e) from e


def stat(path: Path, *, operation: str) -> os.stat_result:
    try:
        return path.stat()
    except FileNotFoundError:
        raise not_found(operation, path) from None
    except PermissionError as e:
        raise _unreadable(operation, path, e) from e
