from __future__ import annotations

import logging
import os
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Tuple

import jinja2

from .bootstrap_operations import build_operation_registry
from .core.access_policy import AccessPolicy
from .core.errors import ResourceNotFound, ResourceUnreadable, TemplateError
from .core.execution_context import MAX_EXEC_TIMEOUT, ExecutionContext
from .engine import TemplateEngineAdapter
from .env_files import merge_env_files
from .trace import RENDER_FAILED, RENDER_FINISHED, RENDER_STARTED, TraceEmitter, TraceStoreJSONL
from .validator import validate_output


logger = logging.getLogger("tmplkit.renderer")

STDIN_NAME = "<stdin>"


@dataclass(frozen=True)
class RenderRequest:
    template_path: Optional[Path] = None
    output_path: Optional[Path] = None
    trust: bool = False
    validate: Optional[str] = None
    env_files: Tuple[Path, ...] = ()
    exec_timeout_max: int = MAX_EXEC_TIMEOUT
    trace_path: Optional[Path] = None

    @property
    def template_name(self) -> str:
        return str(self.template_path) if self.template_path is not None else STDIN_NAME


def _read_template(request: RenderRequest, stdin: TextIO) -> str:
    if request.template_path is None:
        return stdin.read()
    p = request.template_path
    if not p.is_file():
        raise ResourceNotFound(
            code="resource.not_found",
            message=f"Template file not found: {p}",
            data={"path": str(p)},
        )
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceUnreadable(
            code="resource.unreadable",
            message=f"Failed to read template {p}: {e}",
            data={"path": str(p)},
        ) from e


def build_context(request: RenderRequest, *, run_id: Optional[str] = None) -> ExecutionContext:
    if request.template_path is None:
        policy = AccessPolicy.for_stdin(trust=request.trust)
    else:
        policy = AccessPolicy.for_template_file(request.template_path, trust=request.trust)
    environ = merge_env_files(request.env_files, base=os.environ)
    kwargs: Dict[str, Any] = {
        "policy": policy,
        "exec_timeout_max": request.exec_timeout_max,
        "environ": environ,
    }
    if run_id is not None:
        kwargs["run_id"] = run_id
    return ExecutionContext(**kwargs)


def render_template(source: str, context: ExecutionContext, *, template_name: str = STDIN_NAME) -> str:
    """
    Render `source` to a complete string, mapping engine failures to TemplateError.

    TmplkitError raised by operations (denials, missing resources, shape
    errors, timeouts) propagates unchanged.
    """
    adapter = TemplateEngineAdapter(context, build_operation_registry(context))
    try:
        return adapter.render_string(source)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateError(
            code="template.syntax",
            message=f"{template_name}:{e.lineno}: {e.message}",
            data={"template": e.name or template_name, "line": e.lineno},
        ) from e
    except jinja2.TemplateNotFound as e:
        raise TemplateError(
            code="template.not_found",
            message=f"Included template not found: {e.name}",
            data={"template": template_name, "include": str(e.name)},
        ) from e
    except jinja2.TemplateError as e:
        raise TemplateError(
            code="template.render",
            message=f"{template_name}: {e.message or e}",
            data={"template": template_name},
        ) from e
    except (TypeError, ValueError, ArithmeticError, LookupError) as e:
        # Raised by built-in filters or expressions while evaluating the template.
        raise TemplateError(
            code="template.render",
            message=f"{template_name}: {type(e).__name__}: {e}",
            data={"template": template_name},
        ) from e


def _write_output(text: str, request: RenderRequest, stdout: TextIO) -> None:
    if request.output_path is None:
        stdout.write(text)
        stdout.flush()
        return
    request.output_path.parent.mkdir(parents=True, exist_ok=True)
    request.output_path.write_text(text, encoding="utf-8")


def render(request: RenderRequest, *, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> str:
    """
    Render one template end to end and write the result.

    Hard rules:
    - the output is rendered in full and validated before anything is written.
    - any error aborts the run; no partial output is produced.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    run_id = f"run_{uuid.uuid4().hex[:12]}"
    emitter = TraceEmitter(TraceStoreJSONL(request.trace_path), run_id) if request.trace_path else None
    name = request.template_name

    if emitter:
        emitter.emit(RENDER_STARTED, template=name, data={"trust": request.trust, "validate": request.validate})
    try:
        source = _read_template(request, stdin)
        context = build_context(request, run_id=run_id)
        logger.debug("rendering %s (restricted=%s anchor=%s)", name, context.restricted, context.anchor_dir)
        text = render_template(source, context, template_name=name)
        if request.validate:
            validate_output(text, request.validate)
        _write_output(text, request, stdout)
    except Exception as e:
        if emitter:
            emitter.emit(
                RENDER_FAILED,
                template=name,
                message=str(e),
                data={"error_type": type(e).__name__, "code": getattr(e, "code", None)},
            )
        raise

    if emitter:
        emitter.emit(
            RENDER_FINISHED,
            template=name,
            data={"chars": len(text), "output": str(request.output_path) if request.output_path else "stdout"},
        )
    return text
