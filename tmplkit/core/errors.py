from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TmplkitError(Exception):
    code: str
    message: str
    data: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class SandboxDenied(TmplkitError):
    """Path or capability rejected by the access policy (never a defect)."""


class ResourceNotFound(TmplkitError):
    pass


class ResourceUnreadable(TmplkitError):
    pass


class ArgumentShapeError(TmplkitError):
    pass


class SubprocessTimeout(TmplkitError):
    pass


class OperationError(TmplkitError):
    pass


class ValidationError(TmplkitError):
    pass


class RegistryFrozen(TmplkitError):
    pass


class TemplateError(TmplkitError):
    pass
