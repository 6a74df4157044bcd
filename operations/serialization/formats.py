from __future__ import annotations

import json
import tomllib
from typing import Any, Dict

import yaml

from tmplkit.core.errors import OperationError
from tmplkit.core.operation import FUNCTION_AND_FILTER, ArgumentSpec, Operation, OperationDescriptor


_OBJECT_ARG = ArgumentSpec(name="object", type="any", description="Value to serialize")
_STRING_ARG = ArgumentSpec(name="string", type="string", description="Text to parse")


def _failed(name: str, what: str, err: Exception) -> OperationError:
    return OperationError(
        code="operation.failed",
        message=f"{name}: {what}: {err}",
        data={"operation": name},
    )


class ToJson(Operation):
    descriptor = OperationDescriptor(
        name="to_json",
        category="serialization",
        description="Serialize a value to a JSON string",
        arguments=(
            _OBJECT_ARG,
            ArgumentSpec(name="pretty", type="boolean", required=False, default=False, description="Indent output"),
        ),
        examples=("{{ config | to_json(pretty=true) }}", "{{ to_json(object=config) }}"),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        try:
            if args.get("pretty"):
                return json.dumps(args["object"], indent=2, ensure_ascii=False)
            return json.dumps(args["object"], ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise _failed(self.name, "Failed to serialize to JSON", e) from e


class ToYaml(Operation):
    descriptor = OperationDescriptor(
        name="to_yaml",
        category="serialization",
        description="Serialize a value to a YAML string",
        arguments=(_OBJECT_ARG,),
        examples=("{{ config | to_yaml }}",),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        try:
            return yaml.safe_dump(args["object"], sort_keys=False, allow_unicode=True)
        except yaml.YAMLError as e:
            raise _failed(self.name, "Failed to serialize to YAML", e) from e


class ParseJson(Operation):
    descriptor = OperationDescriptor(
        name="parse_json",
        category="serialization",
        description="Parse a JSON string into a value",
        arguments=(_STRING_ARG,),
        return_type="any",
        examples=("{% set data = '{\"a\": 1}' | parse_json %}{{ data.a }}",),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> Any:
        try:
            return json.loads(args["string"])
        except ValueError as e:
            raise _failed(self.name, "Failed to parse JSON", e) from e


class ParseYaml(Operation):
    descriptor = OperationDescriptor(
        name="parse_yaml",
        category="serialization",
        description="Parse a YAML string into a value",
        arguments=(_STRING_ARG,),
        return_type="any",
        examples=("{% set data = 'a: 1' | parse_yaml %}{{ data.a }}",),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> Any:
        try:
            return yaml.safe_load(args["string"])
        except yaml.YAMLError as e:
            raise _failed(self.name, "Failed to parse YAML", e) from e


class ParseToml(Operation):
    descriptor = OperationDescriptor(
        name="parse_toml",
        category="serialization",
        description="Parse a TOML string into a value",
        arguments=(_STRING_ARG,),
        return_type="object",
        examples=("{% set data = 'a = 1' | parse_toml %}{{ data.a }}",),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> Any:
        try:
            return tomllib.loads(args["string"])
        except tomllib.TOMLDecodeError as e:
            raise _failed(self.name, "Failed to parse TOML", e) from e
