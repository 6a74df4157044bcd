from .access_policy import AccessPolicy
from .errors import (
    ArgumentShapeError,
    OperationError,
    RegistryFrozen,
    ResourceNotFound,
    ResourceUnreadable,
    SandboxDenied,
    SubprocessTimeout,
    TemplateError,
    TmplkitError,
    ValidationError,
)
from .execution_context import ExecutionContext
from .operation import ArgumentSpec, ContextOperation, Operation, OperationDescriptor, SyntaxVariants
from .path_resolver import Allowed, DenialReason, Denied, resolve

__all__ = [
    "AccessPolicy",
    "Allowed",
    "ArgumentShapeError",
    "ArgumentSpec",
    "ContextOperation",
    "DenialReason",
    "Denied",
    "ExecutionContext",
    "Operation",
    "OperationDescriptor",
    "OperationError",
    "RegistryFrozen",
    "ResourceNotFound",
    "ResourceUnreadable",
    "SandboxDenied",
    "SubprocessTimeout",
    "SyntaxVariants",
    "TemplateError",
    "TmplkitError",
    "ValidationError",
    "resolve",
]
