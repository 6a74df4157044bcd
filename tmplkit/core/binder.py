from __future__ import annotations

from typing import Iterable, List, Type

from .execution_context import ExecutionContext
from .operation import ContextOperation, Operation


def bind(operation_cls: Type[Operation], context: ExecutionContext) -> Operation:
    """
    Turn an operation class into the bound instance the registry accepts.

    - context-free classes: identity binding (no-arg construction).
    - ContextOperation classes: the context is fixed at construction.
    """
    if not isinstance(operation_cls, type) or not issubclass(operation_cls, Operation):
        raise TypeError(f"Not an operation class: {operation_cls!r}")
    if issubclass(operation_cls, ContextOperation):
        return operation_cls(context)
    return operation_cls()


def bind_all(classes: Iterable[Type[Operation]], context: ExecutionContext) -> List[Operation]:
    return [bind(c, context) for c in classes]
