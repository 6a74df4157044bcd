from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

import yaml

from ..core.errors import RegistryFrozen, ValidationError
from ..core.multi_syntax import build_entries
from ..core.operation import ContextOperation, Operation, OperationDescriptor


class OperationRegistry:
    """
    Catalog of operations available to templates, with their descriptors.

    Populated once at startup, then frozen; the engine adapter only reads
    the name -> callable mappings.
    """

    def __init__(self) -> None:
        self._ops: Dict[str, Operation] = {}
        self._functions: Dict[str, Callable[..., Any]] = {}
        self._filters: Dict[str, Callable[..., Any]] = {}
        self._tests: Dict[str, Callable[..., Any]] = {}
        self._frozen = False

    def register(self, operation: Operation) -> None:
        if self._frozen:
            raise RegistryFrozen(code="registry.frozen", message="Registry is frozen; register before rendering starts")
        if isinstance(operation, type) or not isinstance(operation, Operation):
            raise ValidationError(
                code="registry.not_bound",
                message=f"Expected a bound operation instance, got {operation!r}",
            )
        if isinstance(operation, ContextOperation) and getattr(operation, "_context", None) is None:
            raise ValidationError(
                code="registry.context_missing",
                message=f"Operation {operation.name} needs an ExecutionContext",
                data={"operation": operation.name},
            )

        descriptor = operation.descriptor
        entries = build_entries(operation)
        pending = [
            ("function", self._functions, descriptor.name, entries.call),
            ("filter", self._filters, descriptor.name, entries.transform),
            ("test", self._tests, descriptor.test_name, entries.predicate),
        ]
        if descriptor.name in self._ops:
            raise ValidationError(code="registry.duplicate", message=f"Duplicate operation: {descriptor.name}")
        for kind, table, key, entry in pending:
            if entry is not None and key in table:
                raise ValidationError(
                    code="registry.duplicate",
                    message=f"Duplicate {kind} name: {key}",
                    data={"operation": descriptor.name, "syntax": kind},
                )

        self._ops[descriptor.name] = operation
        for _kind, table, key, entry in pending:
            if entry is not None:
                table[key] = entry

    def freeze(self) -> "OperationRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def functions(self) -> Mapping[str, Callable[..., Any]]:
        return MappingProxyType(self._functions)

    @property
    def filters(self) -> Mapping[str, Callable[..., Any]]:
        return MappingProxyType(self._filters)

    @property
    def tests(self) -> Mapping[str, Callable[..., Any]]:
        return MappingProxyType(self._tests)

    def get(self, name: str) -> Optional[OperationDescriptor]:
        op = self._ops.get(name)
        return op.descriptor if op else None

    def list_operations(self) -> List[OperationDescriptor]:
        return [self._ops[k].descriptor for k in sorted(self._ops.keys())]

    def export(self, fmt: str = "json") -> str:
        return export_descriptors(self.list_operations(), fmt)


def export_descriptors(descriptors: List[OperationDescriptor], fmt: str = "json") -> str:
    data = [d.to_dict() for d in sorted(descriptors, key=lambda d: d.name)]
    if fmt == "json":
        return json.dumps(data, ensure_ascii=False, indent=2)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    raise ValidationError(code="export.format", message=f"Unsupported export format: {fmt}")
