from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class TraceStoreJSONL:
    """Append-only sink for render events, one compact JSON object per line."""

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: dict[str, Any]) -> None:
        # Values outside JSON (paths, enums) are written via str().
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"), default=str)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
