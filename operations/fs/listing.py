from __future__ import annotations

import glob as globlib
from pathlib import Path
from typing import Any, Dict, List

from tmplkit.core.errors import ResourceUnreadable
from tmplkit.core.operation import ArgumentSpec, ContextOperation, OperationDescriptor

from ._io import not_found


class ListDir(ContextOperation):
    descriptor = OperationDescriptor(
        name="list_dir",
        category="filesystem",
        description="List files and directories in a directory",
        arguments=(ArgumentSpec(name="path", type="string", description="Directory path to list"),),
        return_type="array",
        examples=('{% for f in list_dir(path=".") %}{{ f }}{% endfor %}',),
    )

    def run(self, args: Dict[str, Any]) -> List[str]:
        path = self.context.require_path(args["path"], operation=self.name)
        if not path.exists():
            raise not_found(self.name, path)
        if not path.is_dir():
            raise ResourceUnreadable(
                code="resource.unreadable",
                message=f"{self.name}: Not a directory: '{path}'",
                data={"operation": self.name, "path": str(path)},
            )
        return sorted(p.name for p in path.iterdir())


class Glob(ContextOperation):
    descriptor = OperationDescriptor(
        name="glob",
        category="filesystem",
        description="List files matching a glob pattern",
        arguments=(ArgumentSpec(name="pattern", type="string", description='Glob pattern (e.g., "*.txt", "**/*.json")'),),
        return_type="array",
        examples=('{% for f in glob(pattern="*.txt") %}{{ f }}{% endfor %}',),
    )

    def run(self, args: Dict[str, Any]) -> List[str]:
        pattern = args["pattern"]
        # The pattern itself is checked; matches are re-checked after symlinks.
        resolved = self.context.require_path(pattern, operation=self.name, follow_symlinks=False)
        matches = [Path(m) for m in globlib.glob(str(resolved), recursive=True)]
        if self.context.restricted:
            matches = [m for m in matches if self.context.within_anchor(m)]
        return sorted(str(m) for m in matches)
