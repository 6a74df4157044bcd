from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AccessPolicy:
    """
    Sandbox operating mode for one render invocation.

    Hard rules:
    - restricted unless the run was launched with --trust.
    - anchor_dir is absolute and fixed at construction.
    """

    anchor_dir: Path
    restricted: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.anchor_dir, Path):
            object.__setattr__(self, "anchor_dir", Path(self.anchor_dir))
        if not self.anchor_dir.is_absolute():
            raise ValueError(f"anchor_dir must be absolute: {self.anchor_dir}")

    @classmethod
    def for_template_file(cls, template_path: str | Path, *, trust: bool = False) -> "AccessPolicy":
        # Anchor to the directory holding the template, canonicalized once.
        parent = Path(template_path).parent
        return cls(anchor_dir=parent.resolve(), restricted=not trust)

    @classmethod
    def for_stdin(cls, *, trust: bool = False) -> "AccessPolicy":
        return cls(anchor_dir=Path.cwd().resolve(), restricted=not trust)

    @property
    def trust(self) -> bool:
        return not self.restricted
