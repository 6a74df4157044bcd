import os
import tempfile
import unittest
from pathlib import Path

from tmplkit.core.errors import ValidationError
from tmplkit.env_files import merge_env_files, parse_dotenv
from tmplkit.validator import validate_output


class TestEnvFiles(unittest.TestCase):
    def test_parse_dotenv(self) -> None:
        env = parse_dotenv(
            "\n".join(
                [
                    "# comment",
                    "",
                    "A=1",
                    "export B = two",
                    'C="quoted value"',
                    "D='single'",
                    "1BAD=x",
                    "no_equals_sign",
                    "E=a=b",
                ]
            )
        )
        self.assertEqual(env, {"A": "1", "B": "two", "C": "quoted value", "D": "single", "E": "a=b"})

    def test_merge_does_not_touch_os_environ(self) -> None:
        key = "TMPLKIT_TEST_ONLY_VAR"
        self.assertNotIn(key, os.environ)
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / ".env"
            p.write_text(f"{key}=1\n", encoding="utf-8")
            env = merge_env_files([p], base={"X": "y"})
        self.assertEqual(env, {"X": "y", key: "1"})
        self.assertNotIn(key, os.environ)

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ValidationError) as cm:
                merge_env_files([Path(td) / "nope.env"])
        self.assertEqual(cm.exception.code, "env_file.not_found")
        self.assertIn("Environment file not found", cm.exception.message)


class TestValidateOutput(unittest.TestCase):
    def test_valid_documents(self) -> None:
        validate_output('{"a": [1, 2]}', "json")
        validate_output("a:\n  - 1\n", "yaml")
        validate_output('[server]\nport = 8080\n', "toml")

    def test_invalid_documents(self) -> None:
        cases = [
            ('{"a": 1,}', "json"),
            ("a: [1, 2\n", "yaml"),
            ("[server\nport = 1\n", "toml"),
        ]
        for text, fmt in cases:
            with self.assertRaises(ValidationError, msg=fmt) as cm:
                validate_output(text, fmt)
            self.assertEqual(cm.exception.code, "output.invalid")
            self.assertIn("This usually means:", cm.exception.message)

    def test_unknown_format(self) -> None:
        with self.assertRaises(ValidationError):
            validate_output("x", "ini")


if __name__ == "__main__":
    unittest.main()
