import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import yaml

from tmplkit.bootstrap_operations import DESCRIPTOR_SCHEMA
from tmplkit.cli.main import main as tmplkit_main
from tmplkit.contract_store import ContractStore


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        rc = tmplkit_main(argv)
    return rc, out.getvalue(), err.getvalue()


class TestTmplkitCli(unittest.TestCase):
    def test_ide_json_matches_contract(self) -> None:
        rc, out, _ = _run(["--ide", "json"])
        self.assertEqual(rc, 0)
        data = json.loads(out)
        names = [d["name"] for d in data]
        self.assertIn("read_file", names)
        self.assertIn("exec", names)
        self.assertEqual(names, sorted(names))
        store = ContractStore().load()
        for d in data:
            self.assertEqual(store.validate(DESCRIPTOR_SCHEMA, d), [], d["name"])

    def test_ide_yaml(self) -> None:
        rc, out, _ = _run(["--ide", "yaml"])
        self.assertEqual(rc, 0)
        self.assertIsInstance(yaml.safe_load(out), list)

    def test_render_to_stdout(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            t = Path(td) / "main.j2"
            t.write_text('name: {{ "a/b/c.txt" | basename }}\n', encoding="utf-8")
            rc, out, err = _run([str(t), "--validate", "yaml"])
            self.assertEqual(rc, 0, err)
            self.assertEqual(out, "name: c.txt\n")

    def test_render_to_output_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            t = Path(td) / "main.j2"
            t.write_text("{{ md5(string='x') }}", encoding="utf-8")
            o = Path(td) / "out.txt"
            rc, out, _ = _run([str(t), "-o", str(o)])
            self.assertEqual(rc, 0)
            self.assertEqual(out, "")
            self.assertEqual(o.read_text(encoding="utf-8"), "9dd4e461268c8034f5c8564e155c67a6")

    def test_denial_exits_1_without_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            t = Path(td) / "main.j2"
            t.write_text('before {{ read_file(path="/etc/passwd") }} after', encoding="utf-8")
            o = Path(td) / "out.txt"
            rc, out, err = _run([str(t), "-o", str(o)])
            self.assertEqual(rc, 1)
            self.assertEqual(out, "")
            self.assertFalse(o.exists())
            self.assertIn("sandbox.absolute_path_not_allowed", err)
            self.assertIn("Use --trust to bypass this restriction.", err)

    def test_env_files_later_override_earlier(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            a = Path(td) / "a.env"
            b = Path(td) / "b.env"
            a.write_text("GREETING=hello\nNAME=first\n", encoding="utf-8")
            b.write_text("export NAME='second'\n", encoding="utf-8")
            t = Path(td) / "main.j2"
            t.write_text('{{ get_env(name="GREETING") }} {{ get_env(name="NAME") }}', encoding="utf-8")
            rc, out, err = _run([str(t), "--env", str(a), "--env", str(b)])
            self.assertEqual(rc, 0, err)
            self.assertEqual(out, "hello second")

    def test_missing_env_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            t = Path(td) / "main.j2"
            t.write_text("x", encoding="utf-8")
            rc, out, err = _run([str(t), "--env", str(Path(td) / "missing.env")])
            self.assertEqual(rc, 1)
            self.assertEqual(out, "")
            self.assertIn("Environment file not found", err)

    def test_validate_failure(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            t = Path(td) / "main.j2"
            t.write_text('{"a": 1,}', encoding="utf-8")
            rc, out, err = _run([str(t), "--validate", "json"])
            self.assertEqual(rc, 1)
            self.assertEqual(out, "")
            self.assertIn("output.invalid", err)
            self.assertIn("JSON validation failed", err)

    def test_trust_enables_absolute_paths(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            data = Path(td) / "data.txt"
            data.write_text("trusted", encoding="utf-8")
            t = Path(td) / "main.j2"
            t.write_text('{{ read_file(path="%s") }}' % data.as_posix(), encoding="utf-8")
            rc, out, _ = _run([str(t), "--trust"])
            self.assertEqual(rc, 0)
            self.assertEqual(out, "trusted")

    def test_trace_flag_writes_jsonl(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            t = Path(td) / "main.j2"
            t.write_text("x", encoding="utf-8")
            trace = Path(td) / "trace.jsonl"
            rc, _, _ = _run([str(t), "--trace", str(trace)])
            self.assertEqual(rc, 0)
            events = [json.loads(l) for l in trace.read_text(encoding="utf-8").splitlines()]
            self.assertEqual([e["event_type"] for e in events], ["render_started", "render_finished"])
            self.assertEqual(events[0]["template"], str(t))


if __name__ == "__main__":
    unittest.main()
