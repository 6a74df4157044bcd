from __future__ import annotations

import base64
import binascii
from typing import Any, Dict

from tmplkit.core.errors import OperationError
from tmplkit.core.operation import FUNCTION_AND_FILTER, ArgumentSpec, Operation, OperationDescriptor


_STRING_ARG = ArgumentSpec(name="string", type="string", description="The string to encode or decode")


def _decode_failed(name: str, err: Exception) -> OperationError:
    return OperationError(
        code="operation.failed",
        message=f"{name}: Failed to decode input: {err}",
        data={"operation": name},
    )


class Base64Encode(Operation):
    descriptor = OperationDescriptor(
        name="base64_encode",
        category="encoding",
        description="Encode a string to Base64",
        arguments=(_STRING_ARG,),
        examples=('{{ "hello" | base64_encode }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        return base64.b64encode(args["string"].encode("utf-8")).decode("ascii")


class Base64Decode(Operation):
    descriptor = OperationDescriptor(
        name="base64_decode",
        category="encoding",
        description="Decode a Base64 string",
        arguments=(_STRING_ARG,),
        examples=('{{ "aGVsbG8=" | base64_decode }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        try:
            return base64.b64decode(args["string"], validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise _decode_failed(self.name, e) from e


class HexEncode(Operation):
    descriptor = OperationDescriptor(
        name="hex_encode",
        category="encoding",
        description="Encode a string to hexadecimal",
        arguments=(_STRING_ARG,),
        examples=('{{ "hello" | hex_encode }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        return args["string"].encode("utf-8").hex()


class HexDecode(Operation):
    descriptor = OperationDescriptor(
        name="hex_decode",
        category="encoding",
        description="Decode a hexadecimal string",
        arguments=(_STRING_ARG,),
        examples=('{{ "68656c6c6f" | hex_decode }}',),
        syntax=FUNCTION_AND_FILTER,
    )

    def run(self, args: Dict[str, Any]) -> str:
        try:
            return bytes.fromhex(args["string"]).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise _decode_failed(self.name, e) from e
