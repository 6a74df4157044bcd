"""
One implementation, up to three template-facing call shapes.

- function: {{ sha256(string="x") }}
- filter:   {{ "x" | sha256 }}
- test:     {% if "a.txt" is file %}

Filter and test entries only bind the subject to the descriptor's first
argument; everything else goes through the same `invoke` path as a call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import jsonschema
from jsonschema import validators
from jsonschema.exceptions import best_match

from .errors import ArgumentShapeError
from .operation import Operation, OperationDescriptor


SYNTAX_FUNCTION = "function"
SYNTAX_FILTER = "filter"
SYNTAX_TEST = "test"

Entry = Callable[..., Any]


def _is_array(checker: Any, instance: Any) -> bool:
    # Template engines hand over tuple literals as well as lists.
    return isinstance(instance, (list, tuple))


ArgsValidator = validators.extend(
    jsonschema.Draft202012Validator,
    type_checker=jsonschema.Draft202012Validator.TYPE_CHECKER.redefine("array", _is_array),
)


def args_validator(descriptor: OperationDescriptor) -> Any:
    return ArgsValidator(descriptor.args_schema())


@dataclass(frozen=True)
class SyntaxEntries:
    call: Optional[Entry] = None
    transform: Optional[Entry] = None
    predicate: Optional[Entry] = None


def _shape_error(operation: Operation, syntax: str, detail: str) -> ArgumentShapeError:
    return ArgumentShapeError(
        code="argument.shape",
        message=f"{operation.name} ({syntax} syntax): {detail}",
        data={"operation": operation.name, "syntax": syntax},
    )


def invoke(operation: Operation, kwargs: Dict[str, Any], syntax: str, validator: Any = None) -> Any:
    descriptor = operation.descriptor
    args = dict(descriptor.defaults())
    args.update(kwargs)
    if validator is None:
        validator = args_validator(descriptor)
    error = best_match(validator.iter_errors(args))
    if error is not None:
        raise _shape_error(operation, syntax, f"invalid arguments: {error.message}")
    return operation.run(args)


def _bind_subject(operation: Operation, syntax: str, subject: Any, extra: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    spec = operation.descriptor.subject
    if spec is None:
        raise _shape_error(operation, syntax, "operation takes no subject argument")
    if extra:
        raise _shape_error(operation, syntax, f"expected only named arguments after the subject, got {len(extra)} positional")
    if spec.name in kwargs:
        raise _shape_error(operation, syntax, f"'{spec.name}' is already bound to the subject value")
    bound = dict(kwargs)
    bound[spec.name] = subject
    return bound


def make_call(operation: Operation, validator: Any = None) -> Entry:
    if validator is None:
        validator = args_validator(operation.descriptor)

    def call(*args: Any, **kwargs: Any) -> Any:
        if args:
            raise _shape_error(operation, SYNTAX_FUNCTION, f"named arguments only, got {len(args)} positional")
        return invoke(operation, kwargs, SYNTAX_FUNCTION, validator)

    call.__name__ = operation.name
    return call


def make_transform(operation: Operation, validator: Any = None) -> Entry:
    if validator is None:
        validator = args_validator(operation.descriptor)

    def transform(subject: Any, *args: Any, **kwargs: Any) -> Any:
        return invoke(operation, _bind_subject(operation, SYNTAX_FILTER, subject, args, kwargs), SYNTAX_FILTER, validator)

    transform.__name__ = operation.name
    return transform


def make_predicate(operation: Operation, validator: Any = None) -> Entry:
    if validator is None:
        validator = args_validator(operation.descriptor)

    def predicate(subject: Any, *args: Any, **kwargs: Any) -> bool:
        result = invoke(operation, _bind_subject(operation, SYNTAX_TEST, subject, args, kwargs), SYNTAX_TEST, validator)
        if not isinstance(result, bool):
            raise _shape_error(operation, SYNTAX_TEST, f"test must return a boolean, got {type(result).__name__}")
        return result

    predicate.__name__ = operation.descriptor.test_name or operation.name
    return predicate


def build_entries(operation: Operation) -> SyntaxEntries:
    # One compiled validator per descriptor, shared by all of its entries.
    validator = args_validator(operation.descriptor)
    syntax = operation.descriptor.syntax
    return SyntaxEntries(
        call=make_call(operation, validator) if syntax.supports_call else None,
        transform=make_transform(operation, validator) if syntax.supports_transform else None,
        predicate=make_predicate(operation, validator) if syntax.supports_predicate else None,
    )
