"""
Pure path decisions for the sandbox.

`resolve` is a total function over (candidate, policy): it never touches the
filesystem, never follows symlinks and never raises. Callers branch on the
returned PathDecision and translate a denial into a user-facing error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Union

from .access_policy import AccessPolicy


_DRIVE_PREFIX_RE = re.compile(r"^[A-Za-z]:")
_SEPARATORS_RE = re.compile(r"[\\/]")
_PARENT = ".."


class DenialReason(str, Enum):
    ABSOLUTE_PATH_NOT_ALLOWED = "absolute_path_not_allowed"
    PARENT_TRAVERSAL_NOT_ALLOWED = "parent_traversal_not_allowed"
    INVALID_PATH = "invalid_path"


@dataclass(frozen=True)
class Allowed:
    resolved: Path

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class Denied:
    reason: DenialReason
    candidate: str

    @property
    def allowed(self) -> bool:
        return False


PathDecision = Union[Allowed, Denied]


def split_components(candidate: str) -> List[str]:
    # Platform-neutral: both separators count, empty segments are dropped.
    return [c for c in _SEPARATORS_RE.split(candidate) if c]


def is_absolute_candidate(candidate: str) -> bool:
    if candidate.startswith(("/", "\\")):
        return True
    return bool(_DRIVE_PREFIX_RE.match(candidate))


def resolve(candidate: str, policy: AccessPolicy) -> PathDecision:
    if not isinstance(candidate, str) or not candidate or "\x00" in candidate:
        return Denied(reason=DenialReason.INVALID_PATH, candidate=str(candidate))

    components = split_components(candidate)

    if not policy.restricted:
        p = Path(candidate)
        if p.is_absolute():
            return Allowed(resolved=p)
        return Allowed(resolved=policy.anchor_dir / p)

    if is_absolute_candidate(candidate):
        return Denied(reason=DenialReason.ABSOLUTE_PATH_NOT_ALLOWED, candidate=candidate)

    # Syntactic rule: any ".." token is rejected, even if it would cancel out.
    if _PARENT in components:
        return Denied(reason=DenialReason.PARENT_TRAVERSAL_NOT_ALLOWED, candidate=candidate)

    return Allowed(resolved=policy.anchor_dir.joinpath(*components) if components else policy.anchor_dir)
