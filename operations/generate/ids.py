from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from tmplkit.core.operation import ArgumentSpec, Operation, OperationDescriptor


class Uuid(Operation):
    descriptor = OperationDescriptor(
        name="uuid",
        category="generators",
        description="Generate a random (v4) UUID",
        examples=("{{ uuid() }}",),
    )

    def run(self, args: Dict[str, Any]) -> str:
        return str(uuid.uuid4())


class Now(Operation):
    descriptor = OperationDescriptor(
        name="now",
        category="generators",
        description="Current UTC time; ISO 8601 unless a strftime format is given",
        arguments=(
            ArgumentSpec(name="format", type="string", required=False, description="strftime format string"),
        ),
        examples=("{{ now() }}", '{{ now(format="%Y-%m-%d") }}'),
    )

    def run(self, args: Dict[str, Any]) -> str:
        ts = datetime.now(timezone.utc)
        fmt = args.get("format")
        if fmt:
            return ts.strftime(fmt)
        return ts.isoformat()
