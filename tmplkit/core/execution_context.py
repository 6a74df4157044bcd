from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from .access_policy import AccessPolicy
from .errors import SandboxDenied
from .path_resolver import Allowed, DenialReason, PathDecision, resolve


logger = logging.getLogger("tmplkit.sandbox")

DEFAULT_EXEC_TIMEOUT = 30
MAX_EXEC_TIMEOUT = 300

_DENIAL_TEXT = {
    DenialReason.ABSOLUTE_PATH_NOT_ALLOWED: "Absolute paths are not allowed",
    DenialReason.PARENT_TRAVERSAL_NOT_ALLOWED: "Parent directory (..) traversal is not allowed",
    DenialReason.INVALID_PATH: "Path must be a non-empty string without NUL bytes",
}


def denial_message(candidate: str, reason: DenialReason) -> str:
    text = _DENIAL_TEXT[reason]
    if reason is DenialReason.INVALID_PATH:
        return f"{text}: {candidate!r}"
    return f"Security: {text}: {candidate}. Use --trust to bypass this restriction."


def _freeze_environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    src = os.environ if environ is None else environ
    return MappingProxyType(dict(src))


@dataclass(frozen=True, eq=False)
class ExecutionContext:
    """
    Read-only run parameters shared by every operation call of one invocation.

    Hard rules:
    - the only route into the path resolver available to operations.
    - never mutated after construction; safe to share across threads.
    """

    policy: AccessPolicy
    exec_timeout_default: int = DEFAULT_EXEC_TIMEOUT
    exec_timeout_max: int = MAX_EXEC_TIMEOUT
    environ: Mapping[str, str] = field(default_factory=lambda: _freeze_environ(None))
    run_id: str = field(default_factory=lambda: f"run_{uuid.uuid4().hex[:12]}")

    def __post_init__(self) -> None:
        if not isinstance(self.policy, AccessPolicy):
            raise TypeError("ExecutionContext requires an AccessPolicy")
        if not isinstance(self.environ, MappingProxyType):
            object.__setattr__(self, "environ", _freeze_environ(self.environ))
        if self.exec_timeout_max < 1:
            raise ValueError("exec_timeout_max must be >= 1")
        if not 1 <= self.exec_timeout_default <= self.exec_timeout_max:
            object.__setattr__(self, "exec_timeout_default", min(DEFAULT_EXEC_TIMEOUT, self.exec_timeout_max))

    @property
    def restricted(self) -> bool:
        return self.policy.restricted

    @property
    def anchor_dir(self) -> Path:
        return self.policy.anchor_dir

    def resolve_path(self, candidate: str) -> PathDecision:
        return resolve(candidate, self.policy)

    def require_path(self, candidate: str, *, operation: str, follow_symlinks: bool = True) -> Path:
        """
        Resolve `candidate` or raise SandboxDenied naming the operation and path.

        In restricted mode the allowed path is also canonicalized here, at the
        point of use, so a symlink inside anchor_dir cannot lead outside it.
        """
        decision = self.resolve_path(candidate)
        if not isinstance(decision, Allowed):
            logger.debug("denied %s path=%r reason=%s", operation, candidate, decision.reason.value)
            raise SandboxDenied(
                code=f"sandbox.{decision.reason.value}",
                message=f"{operation}: {denial_message(candidate, decision.reason)}",
                data={"operation": operation, "path": candidate, "reason": decision.reason.value},
            )

        resolved = decision.resolved
        if self.policy.restricted:
            # Without follow_symlinks only the final component is left unresolved.
            real = resolved.resolve() if follow_symlinks else resolved.parent.resolve() / resolved.name
            if not self._inside_anchor(real):
                logger.debug("denied %s path=%r real=%s (symlink escape)", operation, candidate, real)
                raise SandboxDenied(
                    code="sandbox.symlink_escape",
                    message=(
                        f"{operation}: Security: Path resolves outside the template directory via a symlink: "
                        f"{candidate}. Use --trust to bypass this restriction."
                    ),
                    data={"operation": operation, "path": candidate, "reason": "symlink_escape"},
                )
            return real if follow_symlinks else resolved
        return resolved

    def within_anchor(self, path: Path) -> bool:
        """True when the canonical form of `path` stays inside the canonical anchor_dir."""
        return self._inside_anchor(path.resolve())

    def _inside_anchor(self, real: Path) -> bool:
        anchor_real = self.policy.anchor_dir.resolve()
        return real == anchor_real or anchor_real in real.parents

    def require_trust(self, operation: str) -> None:
        if self.policy.restricted:
            logger.debug("denied %s (trust mode required)", operation)
            raise SandboxDenied(
                code="sandbox.trust_required",
                message=f"Security: {operation}() requires trust mode. Use --trust to enable it.",
                data={"operation": operation, "reason": "trust_required"},
            )
