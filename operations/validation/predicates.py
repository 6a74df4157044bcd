from __future__ import annotations

import ipaddress
import re
import uuid
from typing import Any, Dict
from urllib.parse import urlparse

from tmplkit.core.errors import OperationError
from tmplkit.core.operation import FUNCTION_AND_TEST, ArgumentSpec, Operation, OperationDescriptor


_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_URL_SCHEMES = {"http", "https", "ftp", "ftps", "ws", "wss", "file"}


def _string_arg(name: str) -> ArgumentSpec:
    return ArgumentSpec(name="string", type="string", description=f"Text to check as {name}")


class IsEmail(Operation):
    descriptor = OperationDescriptor(
        name="is_email",
        category="validation",
        description="True when the string looks like an email address",
        arguments=(_string_arg("an email address"),),
        return_type="boolean",
        examples=('{{ is_email(string="a@example.com") }}', '{% if addr is email %}ok{% endif %}'),
        syntax=FUNCTION_AND_TEST,
    )

    def run(self, args: Dict[str, Any]) -> bool:
        return bool(_EMAIL_RE.match(args["string"]))


class IsUrl(Operation):
    descriptor = OperationDescriptor(
        name="is_url",
        category="validation",
        description="True when the string is an absolute URL with a known scheme",
        arguments=(_string_arg("a URL"),),
        return_type="boolean",
        examples=('{% if link is url %}ok{% endif %}',),
        syntax=FUNCTION_AND_TEST,
    )

    def run(self, args: Dict[str, Any]) -> bool:
        try:
            parts = urlparse(args["string"])
        except ValueError:
            return False
        if parts.scheme not in _URL_SCHEMES:
            return False
        return parts.scheme == "file" or bool(parts.netloc)


class IsIp(Operation):
    descriptor = OperationDescriptor(
        name="is_ip",
        category="validation",
        description="True when the string is an IPv4 or IPv6 address",
        arguments=(_string_arg("an IP address"),),
        return_type="boolean",
        examples=('{% if host is ip %}ok{% endif %}',),
        syntax=FUNCTION_AND_TEST,
    )

    def run(self, args: Dict[str, Any]) -> bool:
        try:
            ipaddress.ip_address(args["string"])
        except ValueError:
            return False
        return True


class IsUuid(Operation):
    descriptor = OperationDescriptor(
        name="is_uuid",
        category="validation",
        description="True when the string is a hyphenated UUID",
        arguments=(_string_arg("a UUID"),),
        return_type="boolean",
        examples=('{% if id is uuid %}ok{% endif %}',),
        syntax=FUNCTION_AND_TEST,
    )

    def run(self, args: Dict[str, Any]) -> bool:
        text = args["string"]
        if len(text) != 36:
            return False
        try:
            uuid.UUID(text)
        except ValueError:
            return False
        return True


class MatchesRegex(Operation):
    descriptor = OperationDescriptor(
        name="matches_regex",
        category="validation",
        description="True when the regular expression matches anywhere in the string",
        arguments=(
            ArgumentSpec(name="pattern", type="string", description="Regular expression"),
            ArgumentSpec(name="string", type="string", description="Text to search"),
        ),
        return_type="boolean",
        examples=('{{ matches_regex(pattern="^v[0-9]+", string=version) }}',),
    )

    def run(self, args: Dict[str, Any]) -> bool:
        try:
            compiled = re.compile(args["pattern"])
        except re.error as e:
            raise OperationError(
                code="operation.failed",
                message=f"{self.name}: Invalid regex pattern: {e}",
                data={"operation": self.name, "pattern": args["pattern"]},
            ) from e
        return compiled.search(args["string"]) is not None
