from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from .core.errors import ValidationError


logger = logging.getLogger("tmplkit.env_files")

_ENV_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_dotenv(text: str) -> Dict[str, str]:
    """
    Minimal dotenv parser (no dependencies).

    - Supports lines like KEY=VALUE (optionally prefixed with 'export ')
    - Ignores empty lines and comments (# ...)
    - Strips single/double quotes around values
    - Skips keys that are not valid environment variable names
    """
    out: Dict[str, str] = {}
    for raw_line in text.splitlines():
        s = raw_line.strip()
        if not s or s.startswith("#"):
            continue
        if s.startswith("export "):
            s = s[len("export ") :].lstrip()
        if "=" not in s:
            continue
        k, v = s.split("=", 1)
        k = k.strip()
        v = v.strip()
        if not k or not _ENV_KEY_RE.match(k):
            continue
        if len(v) >= 2 and ((v[0] == v[-1] == '"') or (v[0] == v[-1] == "'")):
            v = v[1:-1]
        out[k] = v
    return out


def load_env_file(path: Path) -> Dict[str, str]:
    if not path.is_file():
        raise ValidationError(
            code="env_file.not_found",
            message=f"Environment file not found: {path}",
            data={"path": str(path)},
        )
    try:
        txt = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(
            code="env_file.unreadable",
            message=f"Failed to read environment file {path}: {e}",
            data={"path": str(path)},
        ) from e
    return parse_dotenv(txt)


def merge_env_files(paths: Iterable[Path], base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Layer env files over `base`; later files override earlier ones.

    The result is a new dict: the process environment is never modified.
    """
    env: Dict[str, str] = dict(base or {})
    for p in paths:
        values = load_env_file(p)
        logger.debug("loaded %d variable(s) from %s", len(values), p)
        env.update(values)
    return env
