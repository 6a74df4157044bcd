from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tmplkit import __version__
from tmplkit.bootstrap_operations import list_descriptors
from tmplkit.core.errors import TmplkitError
from tmplkit.core.execution_context import MAX_EXEC_TIMEOUT
from tmplkit.registry.operation_registry import export_descriptors
from tmplkit.renderer import RenderRequest, render
from tmplkit.validator import VALIDATE_FORMATS


def _format_cli_error(e: Exception) -> str:
    """
    Print-friendly error formatting for CLI commands.
    - Always includes code/message (via __str__) when it's a TmplkitError
    - Includes structured `data` payload when present
    """
    if isinstance(e, TmplkitError) and isinstance(e.data, dict) and e.data:
        data = dict(e.data)
        # Keep error bodies bounded to avoid dumping huge blobs.
        if isinstance(data.get("stderr"), str) and len(data["stderr"]) > 2000:
            data["stderr"] = data["stderr"][:2000] + "...(truncated)"
        return str(e) + "\n" + json.dumps(data, ensure_ascii=False, indent=2, default=str)
    return str(e)


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmplkit",
        description="Render a Jinja2 template with sandboxed filesystem, environment and exec operations",
    )
    parser.add_argument("template", nargs="?", help="Template file. If omitted, read from stdin.")
    parser.add_argument("-o", "--output", help="Write output to this file (default: stdout)")
    parser.add_argument(
        "--trust",
        action="store_true",
        help="Unrestricted mode: allow absolute paths, '..' traversal and exec",
    )
    parser.add_argument("--validate", choices=list(VALIDATE_FORMATS), help="Validate rendered output before writing")
    parser.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="FILE",
        help="dotenv file merged into the template environment (repeatable, later files win)",
    )
    parser.add_argument(
        "--exec-timeout-max",
        type=_positive_int,
        default=MAX_EXEC_TIMEOUT,
        metavar="SECONDS",
        help=f"Upper bound for exec() timeouts (default: {MAX_EXEC_TIMEOUT})",
    )
    parser.add_argument("--ide", choices=["json", "yaml"], help="Print operation descriptors and exit")
    parser.add_argument("--trace", help="Append render events to this JSONL file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def cmd_ide(ns: argparse.Namespace) -> int:
    out = export_descriptors(list_descriptors(), ns.ide)
    sys.stdout.write(out if out.endswith("\n") else out + "\n")
    return 0


def cmd_render(ns: argparse.Namespace) -> int:
    request = RenderRequest(
        template_path=Path(ns.template) if ns.template else None,
        output_path=Path(ns.output) if ns.output else None,
        trust=bool(ns.trust),
        validate=ns.validate,
        env_files=tuple(Path(p) for p in ns.env),
        exec_timeout_max=ns.exec_timeout_max,
        trace_path=Path(ns.trace) if ns.trace else None,
    )
    render(request)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    _configure_logging(ns.verbose)

    func = cmd_ide if ns.ide else cmd_render
    try:
        return int(func(ns))
    except Exception as e:  # noqa: BLE001
        print(_format_cli_error(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
