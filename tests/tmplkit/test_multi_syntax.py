import tempfile
import unittest
from pathlib import Path

from operations.fs import IsFile
from operations.hashing import Sha256
from operations.path import JoinPath
from operations.serialization import ToJson
from operations.validation import IsEmail
from tmplkit.core.access_policy import AccessPolicy
from tmplkit.core.errors import ArgumentShapeError, SandboxDenied
from tmplkit.core.execution_context import ExecutionContext
from tmplkit.core.multi_syntax import args_validator, build_entries
from tmplkit.core.operation import ArgumentSpec, Operation, OperationDescriptor, SyntaxVariants


class _NotBoolean(Operation):
    descriptor = OperationDescriptor(
        name="is_odd_shape",
        category="test",
        description="Returns a string from a predicate",
        arguments=(ArgumentSpec(name="value", type="string"),),
        return_type="boolean",
        syntax=SyntaxVariants(supports_predicate=True),
    )

    def run(self, args):
        return "yes"


class TestSyntaxEquivalence(unittest.TestCase):
    def test_call_and_transform_agree(self) -> None:
        e = build_entries(Sha256())
        self.assertEqual(e.call(string="hello"), e.transform("hello"))
        self.assertEqual(
            e.call(string="hello"),
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824",
        )

    def test_transform_with_extra_named_argument(self) -> None:
        e = build_entries(ToJson())
        self.assertEqual(e.call(object={"a": 1}, pretty=True), e.transform({"a": 1}, pretty=True))
        self.assertEqual(e.transform({"a": 1}), '{"a": 1}')

    def test_call_and_predicate_agree(self) -> None:
        e = build_entries(IsEmail())
        for s in ("a@example.com", "not-an-email"):
            self.assertEqual(e.call(string=s), e.predicate(s))

    def test_file_predicate_and_function_twin(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            anchor = Path(td).resolve()
            (anchor / "a.txt").write_text("x", encoding="utf-8")
            ctx = ExecutionContext(policy=AccessPolicy(anchor_dir=anchor), environ={})
            e = build_entries(IsFile(ctx))
            for p in ("a.txt", "missing.txt", "."):
                self.assertEqual(e.call(path=p), e.predicate(p), p)
            self.assertTrue(e.predicate("a.txt"))

    def test_predicate_denial_raises_in_both_shapes(self) -> None:
        ctx = ExecutionContext(policy=AccessPolicy(anchor_dir=Path("/srv/app")), environ={})
        e = build_entries(IsFile(ctx))
        with self.assertRaises(SandboxDenied):
            e.call(path="/etc/passwd")
        with self.assertRaises(SandboxDenied):
            e.predicate("/etc/passwd")

    def test_array_arguments_accept_tuples(self) -> None:
        e = build_entries(JoinPath())
        self.assertEqual(e.transform(("a", "b")), e.call(parts=["a", "b"]))
        self.assertEqual(e.call(parts=("x",)), "x")
        self.assertTrue(args_validator(JoinPath.descriptor).is_valid({"parts": ("a",)}))
        self.assertFalse(args_validator(JoinPath.descriptor).is_valid({"parts": "a"}))

    def test_unsupported_shapes_are_absent(self) -> None:
        e = build_entries(JoinPath())
        self.assertIsNotNone(e.transform)
        self.assertIsNone(e.predicate)


class TestArgumentShape(unittest.TestCase):
    def test_positional_call_rejected(self) -> None:
        call = build_entries(Sha256()).call
        with self.assertRaises(ArgumentShapeError) as cm:
            call("hello")
        self.assertIn("function syntax", cm.exception.message)
        self.assertEqual(cm.exception.data["syntax"], "function")

    def test_missing_required_argument(self) -> None:
        with self.assertRaises(ArgumentShapeError):
            build_entries(Sha256()).call()

    def test_unknown_argument(self) -> None:
        with self.assertRaises(ArgumentShapeError):
            build_entries(Sha256()).call(string="x", salt="y")

    def test_wrong_type(self) -> None:
        with self.assertRaises(ArgumentShapeError) as cm:
            build_entries(Sha256()).transform(42)
        self.assertEqual(cm.exception.data, {"operation": "sha256", "syntax": "filter"})

    def test_subject_bound_twice(self) -> None:
        with self.assertRaises(ArgumentShapeError):
            build_entries(Sha256()).transform("x", string="y")

    def test_extra_positional_after_subject(self) -> None:
        with self.assertRaises(ArgumentShapeError):
            build_entries(ToJson()).transform({"a": 1}, True)

    def test_predicate_must_return_boolean(self) -> None:
        e = build_entries(_NotBoolean())
        self.assertEqual(e.call(value="x"), "yes")
        with self.assertRaises(ArgumentShapeError) as cm:
            e.predicate("x")
        self.assertIn("test syntax", cm.exception.message)


if __name__ == "__main__":
    unittest.main()
