from .command import Exec, ExecRaw

OPERATIONS = [Exec, ExecRaw]

__all__ = ["OPERATIONS", "Exec", "ExecRaw"]
