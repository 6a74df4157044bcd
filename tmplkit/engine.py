"""
Jinja2 boundary: the only module that knows about the template engine.

The adapter installs the registry's name -> callable mappings (functions as
globals, transforms as filters, predicates as tests) into a fresh Environment
whose loader routes every include through the ExecutionContext. The
Environment is Jinja2's immutable sandbox, so template text cannot reach
attributes such as `__globals__` or `__closure__` to get around the policy.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Tuple

import jinja2
from jinja2.sandbox import ImmutableSandboxedEnvironment

from .core.execution_context import ExecutionContext
from .registry.operation_registry import OperationRegistry


logger = logging.getLogger("tmplkit.engine")


class SandboxLoader(jinja2.BaseLoader):
    """
    Loads `{% include %}`, `{% import %}` and `{% extends %}` targets.

    Names go through the same `require_path` as every file operation, so a
    nested include is held to the same policy as the top-level template.
    """

    def __init__(self, context: ExecutionContext):
        self._context = context

    def get_source(self, environment: jinja2.Environment, template: str) -> Tuple[str, Optional[str], Callable[[], bool]]:
        path = self._context.require_path(template, operation="include")
        if not path.is_file():
            raise jinja2.TemplateNotFound(template)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise jinja2.TemplateNotFound(template, message=f"{template}: {e}") from e
        mtime = path.stat().st_mtime

        def uptodate() -> bool:
            try:
                return path.stat().st_mtime == mtime
            except OSError:
                return False

        logger.debug("include %s -> %s", template, path)
        return source, str(path), uptodate


class TemplateEngineAdapter:
    def __init__(self, context: ExecutionContext, registry: OperationRegistry):
        self._context = context
        self._registry = registry
        self._env = ImmutableSandboxedEnvironment(
            loader=SandboxLoader(context),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._install(self._env.globals, registry.functions)
        self._install(self._env.filters, registry.filters)
        self._install(self._env.tests, registry.tests)

    @staticmethod
    def _install(target: Any, entries: Mapping[str, Callable[..., Any]]) -> None:
        # Catalog entries replace Jinja2 built-ins of the same name.
        target.update(entries)

    @property
    def environment(self) -> ImmutableSandboxedEnvironment:
        return self._env

    def render_string(self, source: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        template = self._env.from_string(source)
        return template.render(dict(variables or {}))

