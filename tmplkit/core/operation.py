from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .execution_context import ExecutionContext


_JSON_TYPES = {
    "string": "string",
    "integer": "integer",
    "number": "number",
    "boolean": "boolean",
    "array": "array",
    "object": "object",
    "null": "null",
}


@dataclass(frozen=True)
class ArgumentSpec:
    name: str
    type: str
    required: bool = True
    default: Any = None
    description: str = ""

    def json_schema(self) -> Dict[str, Any]:
        # "any" leaves the value unconstrained; "a|b" is a union of JSON types.
        if self.type == "any":
            return {}
        kinds = [_JSON_TYPES[t] for t in self.type.split("|")]
        return {"type": kinds[0] if len(kinds) == 1 else kinds}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "required": self.required,
            "default": self.default,
            "description": self.description,
        }


@dataclass(frozen=True)
class SyntaxVariants:
    supports_call: bool = True
    supports_transform: bool = False
    supports_predicate: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "supports_call": self.supports_call,
            "supports_transform": self.supports_transform,
            "supports_predicate": self.supports_predicate,
        }


FUNCTION_ONLY = SyntaxVariants()
FUNCTION_AND_FILTER = SyntaxVariants(supports_transform=True)
FUNCTION_AND_TEST = SyntaxVariants(supports_predicate=True)


@dataclass(frozen=True)
class OperationDescriptor:
    """
    Metadata record for one operation: one descriptor, one implementation,
    up to three template-facing entries (function, filter, test).
    """

    name: str
    category: str
    description: str
    arguments: Tuple[ArgumentSpec, ...] = ()
    return_type: str = "string"
    examples: Tuple[str, ...] = ()
    syntax: SyntaxVariants = field(default=FUNCTION_ONLY)
    predicate_name: Optional[str] = None

    @property
    def test_name(self) -> Optional[str]:
        if not self.syntax.supports_predicate:
            return None
        if self.predicate_name:
            return self.predicate_name
        return self.name[3:] if self.name.startswith("is_") else self.name

    @property
    def subject(self) -> Optional[ArgumentSpec]:
        return self.arguments[0] if self.arguments else None

    def defaults(self) -> Dict[str, Any]:
        return {a.name: a.default for a in self.arguments if not a.required and a.default is not None}

    def args_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "additionalProperties": False,
            "properties": {a.name: a.json_schema() for a in self.arguments},
            "required": [a.name for a in self.arguments if a.required],
        }

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "arguments": [a.to_dict() for a in self.arguments],
            "return_type": self.return_type,
            "examples": list(self.examples),
            "syntax": self.syntax.to_dict(),
        }
        if self.test_name is not None:
            out["test_name"] = self.test_name
        return out


class Operation:
    """
    Context-free operation. Subclasses set `descriptor` and implement `run`.

    `run` receives already shape-checked, default-filled arguments.
    """

    descriptor: OperationDescriptor

    def run(self, args: Dict[str, Any]) -> Any:
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.descriptor.name


class ContextOperation(Operation):
    """
    Operation that dereferences the filesystem or the environment.

    It cannot be constructed without an ExecutionContext, so an instance
    handed to the registry always carries its sandbox.
    """

    def __init__(self, context: ExecutionContext):
        if not isinstance(context, ExecutionContext):
            raise TypeError(f"{type(self).__name__} requires an ExecutionContext, got {type(context).__name__}")
        self._context = context

    @property
    def context(self) -> ExecutionContext:
        return self._context


def operation_classes_descriptors(classes: List[type]) -> List[OperationDescriptor]:
    return sorted((c.descriptor for c in classes), key=lambda d: d.name)
