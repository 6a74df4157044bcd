from __future__ import annotations

import hashlib
from typing import Any, Dict

from tmplkit.core.operation import FUNCTION_AND_FILTER, ArgumentSpec, Operation, OperationDescriptor


_STRING_ARG = ArgumentSpec(name="string", type="string", description="The string to hash")


def _descriptor(name: str, label: str) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        category="hash",
        description=f"Calculate {label} hash of a string (hex digest)",
        arguments=(_STRING_ARG,),
        return_type="string",
        examples=(f'{{{{ {name}(string="hello") }}}}', f'{{{{ "hello" | {name} }}}}'),
        syntax=FUNCTION_AND_FILTER,
    )


class _Digest(Operation):
    algorithm = ""

    def run(self, args: Dict[str, Any]) -> str:
        return hashlib.new(self.algorithm, args["string"].encode("utf-8")).hexdigest()


class Md5(_Digest):
    algorithm = "md5"
    descriptor = _descriptor("md5", "MD5")


class Sha1(_Digest):
    algorithm = "sha1"
    descriptor = _descriptor("sha1", "SHA-1")


class Sha256(_Digest):
    algorithm = "sha256"
    descriptor = _descriptor("sha256", "SHA-256")


class Sha512(_Digest):
    algorithm = "sha512"
    descriptor = _descriptor("sha512", "SHA-512")
