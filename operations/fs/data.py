from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict

import yaml

from tmplkit.core.errors import OperationError
from tmplkit.core.operation import ArgumentSpec, ContextOperation, OperationDescriptor

from ._io import read_text


def _parse_file(op: ContextOperation, args: Dict[str, Any], fmt: str, loader: Callable[[str], Any]) -> Any:
    path: Path = op.context.require_path(args["path"], operation=op.name)
    content = read_text(path, operation=op.name)
    try:
        return loader(content)
    except (ValueError, yaml.YAMLError) as e:
        # json.JSONDecodeError and tomllib.TOMLDecodeError are ValueErrors.
        raise OperationError(
            code="operation.failed",
            message=f"{op.name}: Failed to parse {fmt} from file '{path}': {e}",
            data={"operation": op.name, "path": str(path)},
        ) from e


class ReadJsonFile(ContextOperation):
    descriptor = OperationDescriptor(
        name="read_json_file",
        category="data_parsing",
        description="Read and parse a JSON file",
        arguments=(ArgumentSpec(name="path", type="string", description="Path to the JSON file"),),
        return_type="object|array",
        examples=('{% set config = read_json_file(path="config.json") %}',),
    )

    def run(self, args: Dict[str, Any]) -> Any:
        return _parse_file(self, args, "JSON", json.loads)


class ReadYamlFile(ContextOperation):
    descriptor = OperationDescriptor(
        name="read_yaml_file",
        category="data_parsing",
        description="Read and parse a YAML file",
        arguments=(ArgumentSpec(name="path", type="string", description="Path to the YAML file"),),
        return_type="object|array",
        examples=('{% set config = read_yaml_file(path="config.yaml") %}',),
    )

    def run(self, args: Dict[str, Any]) -> Any:
        return _parse_file(self, args, "YAML", yaml.safe_load)


class ReadTomlFile(ContextOperation):
    descriptor = OperationDescriptor(
        name="read_toml_file",
        category="data_parsing",
        description="Read and parse a TOML file",
        arguments=(ArgumentSpec(name="path", type="string", description="Path to the TOML file"),),
        return_type="object",
        examples=('{% set cargo = read_toml_file(path="Cargo.toml") %}',),
    )

    def run(self, args: Dict[str, Any]) -> Any:
        return _parse_file(self, args, "TOML", tomllib.loads)
