"""
Command execution from templates.

Only available in trust mode. Commands run through the platform shell with a
bounded timeout; on expiry the child is killed and its output discarded.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from typing import Any, Dict

from tmplkit.core.errors import ArgumentShapeError, OperationError, SubprocessTimeout
from tmplkit.core.operation import ArgumentSpec, ContextOperation, OperationDescriptor


logger = logging.getLogger("tmplkit.exec")

_ARGS = (
    ArgumentSpec(name="command", type="string", description="Command line, executed via the system shell"),
    ArgumentSpec(name="timeout", type="integer", required=False, description="Timeout in seconds (default 30)"),
)


def _kill(proc: subprocess.Popen) -> None:
    # The shell may have spawned children; take down the whole group.
    if os.name == "nt":
        proc.kill()
    else:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass


def _shell_argv(command: str) -> list[str]:
    if os.name == "nt":
        return ["cmd", "/C", command]
    return ["sh", "-c", command]


class _CommandOperation(ContextOperation):
    def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        self.context.require_trust(self.name)

        command = args["command"]
        timeout = args.get("timeout")
        timeout = self.context.exec_timeout_default if timeout is None else int(timeout)
        limit = self.context.exec_timeout_max
        if not 1 <= timeout <= limit:
            raise ArgumentShapeError(
                code="argument.shape",
                message=f"{self.name}: Timeout must be between 1 and {limit} seconds, got {timeout}",
                data={"operation": self.name, "timeout": timeout},
            )

        logger.debug("%s: running %r (timeout=%ss)", self.name, command, timeout)
        try:
            proc = subprocess.Popen(  # noqa: S603
                _shell_argv(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=dict(self.context.environ),
                cwd=str(self.context.anchor_dir),
                start_new_session=(os.name != "nt"),
            )
        except OSError as e:
            raise OperationError(
                code="operation.failed",
                message=f"{self.name}: Failed to execute command '{command}': {e}",
                data={"operation": self.name, "command": command},
            ) from e

        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            _kill(proc)
            proc.communicate()
            raise SubprocessTimeout(
                code="exec.timeout",
                message=f"{self.name}: Command timed out after {timeout} seconds: {command}",
                data={"operation": self.name, "command": command, "timeout": timeout},
            ) from e

        return {
            "exit_code": proc.returncode,
            "stdout": stdout.decode("utf-8", errors="replace"),
            "stderr": stderr.decode("utf-8", errors="replace"),
            "success": proc.returncode == 0,
        }


class Exec(_CommandOperation):
    descriptor = OperationDescriptor(
        name="exec",
        category="exec",
        description="Execute a shell command and return stdout (fails on non-zero exit; requires --trust)",
        arguments=_ARGS,
        return_type="string",
        examples=('{{ exec(command="hostname") }}',),
    )

    def run(self, args: Dict[str, Any]) -> str:
        result = self.execute(args)
        if not result["success"]:
            raise OperationError(
                code="operation.failed",
                message=f"{self.name}: Command failed (exit {result['exit_code']}): {args['command']}\nStderr: {result['stderr']}",
                data={"operation": self.name, "exit_code": result["exit_code"]},
            )
        return result["stdout"]


class ExecRaw(_CommandOperation):
    descriptor = OperationDescriptor(
        name="exec_raw",
        category="exec",
        description="Execute a shell command and return {exit_code, stdout, stderr, success} (requires --trust)",
        arguments=_ARGS,
        return_type="object",
        examples=('{% set r = exec_raw(command="grep foo hosts") %}{{ r.exit_code }}',),
    )

    def run(self, args: Dict[str, Any]) -> Dict[str, Any]:
        return self.execute(args)
