"""
Filesystem checks usable as functions and as `is` tests:

    {% if is_file(path="config.json") %} ... {% endif %}
    {% if "config.json" is file %} ... {% endif %}

Both shapes resolve the path through the same sandbox, so a denied path
fails the render in either form instead of quietly testing false.
"""

from __future__ import annotations

from typing import Any, Dict

from tmplkit.core.operation import FUNCTION_AND_TEST, ArgumentSpec, ContextOperation, OperationDescriptor


_PATH_TO_CHECK = ArgumentSpec(name="path", type="string", description="Path to check")


class IsFile(ContextOperation):
    descriptor = OperationDescriptor(
        name="is_file",
        category="filesystem",
        description="Check if a path exists and is a regular file",
        arguments=(_PATH_TO_CHECK,),
        return_type="boolean",
        examples=('{{ is_file(path="config.json") }}', '{% if "config.json" is file %}ok{% endif %}'),
        syntax=FUNCTION_AND_TEST,
    )

    def run(self, args: Dict[str, Any]) -> bool:
        return self.context.require_path(args["path"], operation=self.name).is_file()


class IsDir(ContextOperation):
    descriptor = OperationDescriptor(
        name="is_dir",
        category="filesystem",
        description="Check if a path exists and is a directory",
        arguments=(_PATH_TO_CHECK,),
        return_type="boolean",
        examples=('{{ is_dir(path="src") }}', '{% if "src" is dir %}ok{% endif %}'),
        syntax=FUNCTION_AND_TEST,
    )

    def run(self, args: Dict[str, Any]) -> bool:
        return self.context.require_path(args["path"], operation=self.name).is_dir()


class IsSymlink(ContextOperation):
    descriptor = OperationDescriptor(
        name="is_symlink",
        category="filesystem",
        description="Check if a path is a symbolic link",
        arguments=(_PATH_TO_CHECK,),
        return_type="boolean",
        examples=('{{ is_symlink(path="link") }}', '{% if "link" is symlink %}ok{% endif %}'),
        syntax=FUNCTION_AND_TEST,
    )

    def run(self, args: Dict[str, Any]) -> bool:
        # Must not follow the link it is asked about.
        path = self.context.require_path(args["path"], operation=self.name, follow_symlinks=False)
        return path.is_symlink()
