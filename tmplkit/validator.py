from __future__ import annotations

import json
import tomllib
from typing import Any, Callable, Dict, List, Tuple

import yaml

from .core.errors import ValidationError


VALIDATE_FORMATS = ("json", "yaml", "toml")


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


_PARSERS: Dict[str, Tuple[Callable[[str], Any], Tuple[type, ...], List[str]]] = {
    "json": (
        json.loads,
        (ValueError,),
        [
            "Missing or extra commas",
            "Unclosed brackets or braces",
            "Invalid escape sequences",
            "Trailing commas (not allowed in JSON)",
            "Unquoted keys or values",
        ],
    ),
    "yaml": (
        _parse_yaml,
        (yaml.YAMLError,),
        [
            "Incorrect indentation (use spaces, not tabs)",
            "Missing or misplaced colons",
            "Invalid list syntax (- item)",
            "Unclosed quotes",
        ],
    ),
    "toml": (
        tomllib.loads,
        (tomllib.TOMLDecodeError,),
        [
            "Invalid section headers [section]",
            "Duplicate keys",
            "Missing quotes around strings",
            "Incorrect table array syntax [[array]]",
        ],
    ),
}


def validate_output(text: str, fmt: str) -> None:
    """
    Parse rendered output as `fmt`; raise ValidationError(output.invalid) if it does not parse.
    """
    entry = _PARSERS.get(fmt)
    if entry is None:
        raise ValidationError(
            code="output.format",
            message=f"Unsupported validation format: {fmt} (expected one of {', '.join(VALIDATE_FORMATS)})",
        )
    parse, errors, hints = entry
    try:
        parse(text)
    except errors as e:
        lines = [f"{fmt.upper()} validation failed: {e}", "", "This usually means:"]
        lines.extend(f"- {h}" for h in hints)
        raise ValidationError(code="output.invalid", message="\n".join(lines), data={"format": fmt}) from e
