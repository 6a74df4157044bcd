import os
import tempfile
import unittest
from pathlib import Path

from tmplkit.core.access_policy import AccessPolicy
from tmplkit.core.errors import SandboxDenied
from tmplkit.core.execution_context import ExecutionContext


def _ctx(anchor: Path, *, trust: bool = False, **kwargs) -> ExecutionContext:
    return ExecutionContext(policy=AccessPolicy(anchor_dir=anchor, restricted=not trust), **kwargs)


class TestExecutionContext(unittest.TestCase):
    def test_denial_message_names_path_and_remedy(self) -> None:
        ctx = _ctx(Path("/srv/app"))
        with self.assertRaises(SandboxDenied) as cm:
            ctx.require_path("/etc/passwd", operation="read_file")
        e = cm.exception
        self.assertEqual(e.code, "sandbox.absolute_path_not_allowed")
        self.assertIn("read_file", e.message)
        self.assertIn("Absolute paths are not allowed: /etc/passwd", e.message)
        self.assertIn("--trust", e.message)
        self.assertEqual(e.data["path"], "/etc/passwd")

    def test_traversal_denial_code(self) -> None:
        ctx = _ctx(Path("/srv/app"))
        with self.assertRaises(SandboxDenied) as cm:
            ctx.require_path("../secrets/key", operation="read_file")
        self.assertEqual(cm.exception.code, "sandbox.parent_traversal_not_allowed")
        self.assertIn("Parent directory (..) traversal is not allowed: ../secrets/key", cm.exception.message)

    def test_environ_is_a_read_only_snapshot(self) -> None:
        src = {"A": "1"}
        ctx = _ctx(Path("/srv/app"), environ=src)
        src["A"] = "2"
        self.assertEqual(ctx.environ["A"], "1")
        with self.assertRaises(TypeError):
            ctx.environ["B"] = "x"  # type: ignore[index]

    def test_context_is_frozen(self) -> None:
        ctx = _ctx(Path("/srv/app"))
        with self.assertRaises(Exception):
            ctx.exec_timeout_max = 5  # type: ignore[misc]

    def test_requires_access_policy(self) -> None:
        with self.assertRaises(TypeError):
            ExecutionContext(policy="restricted")  # type: ignore[arg-type]

    def test_require_trust(self) -> None:
        with self.assertRaises(SandboxDenied) as cm:
            _ctx(Path("/srv/app")).require_trust("exec")
        self.assertEqual(cm.exception.code, "sandbox.trust_required")
        _ctx(Path("/srv/app"), trust=True).require_trust("exec")

    def test_default_timeout_clamped_to_max(self) -> None:
        ctx = _ctx(Path("/srv/app"), exec_timeout_max=5)
        self.assertEqual(ctx.exec_timeout_default, 5)


@unittest.skipUnless(hasattr(os, "symlink") and os.name == "posix", "symlinks required")
class TestSymlinkEscape(unittest.TestCase):
    def test_symlink_pointing_outside_anchor_is_denied(self) -> None:
        with tempfile.TemporaryDirectory() as outside, tempfile.TemporaryDirectory() as td:
            anchor = Path(td).resolve()
            secret = Path(outside) / "secret.txt"
            secret.write_text("s3cret", encoding="utf-8")
            (anchor / "link.txt").symlink_to(secret)

            ctx = _ctx(anchor)
            with self.assertRaises(SandboxDenied) as cm:
                ctx.require_path("link.txt", operation="read_file")
            self.assertEqual(cm.exception.code, "sandbox.symlink_escape")

            # The link itself may still be inspected without following it.
            p = ctx.require_path("link.txt", operation="is_symlink", follow_symlinks=False)
            self.assertTrue(p.is_symlink())

    def test_symlink_inside_anchor_is_allowed(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            anchor = Path(td).resolve()
            (anchor / "real.txt").write_text("x", encoding="utf-8")
            (anchor / "alias.txt").symlink_to(anchor / "real.txt")
            p = _ctx(anchor).require_path("alias.txt", operation="read_file")
            self.assertEqual(p, anchor / "real.txt")

    def test_trust_mode_skips_symlink_check(self) -> None:
        with tempfile.TemporaryDirectory() as outside, tempfile.TemporaryDirectory() as td:
            anchor = Path(td).resolve()
            (anchor / "link.txt").symlink_to(Path(outside) / "x.txt")
            p = _ctx(anchor, trust=True).require_path("link.txt", operation="read_file")
            self.assertEqual(p, anchor / "link.txt")


if __name__ == "__main__":
    unittest.main()
