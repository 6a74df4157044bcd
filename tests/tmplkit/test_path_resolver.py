import unittest
from pathlib import Path

from tmplkit.core.access_policy import AccessPolicy
from tmplkit.core.path_resolver import Allowed, DenialReason, Denied, resolve


ANCHOR = Path("/srv/app")


class TestPathResolverScenarios(unittest.TestCase):
    def setUp(self) -> None:
        self.restricted = AccessPolicy(anchor_dir=ANCHOR, restricted=True)
        self.trusted = AccessPolicy(anchor_dir=ANCHOR, restricted=False)

    def test_relative_file_is_joined_to_anchor(self) -> None:
        self.assertEqual(resolve("config.json", self.restricted), Allowed(resolved=ANCHOR / "config.json"))

    def test_parent_traversal_is_denied(self) -> None:
        d = resolve("../secrets/key", self.restricted)
        self.assertIsInstance(d, Denied)
        self.assertEqual(d.reason, DenialReason.PARENT_TRAVERSAL_NOT_ALLOWED)

    def test_absolute_path_is_denied(self) -> None:
        d = resolve("/etc/passwd", self.restricted)
        self.assertIsInstance(d, Denied)
        self.assertEqual(d.reason, DenialReason.ABSOLUTE_PATH_NOT_ALLOWED)

    def test_absolute_path_allowed_in_trust_mode(self) -> None:
        self.assertEqual(resolve("/etc/passwd", self.trusted), Allowed(resolved=Path("/etc/passwd")))

    def test_cancelling_parent_token_is_still_denied(self) -> None:
        d = resolve("./a/./b/../c", self.restricted)
        self.assertEqual(d, Denied(reason=DenialReason.PARENT_TRAVERSAL_NOT_ALLOWED, candidate="./a/./b/../c"))

    def test_invalid_candidates(self) -> None:
        for candidate in ("", "a\x00b"):
            d = resolve(candidate, self.restricted)
            self.assertIsInstance(d, Denied)
            self.assertEqual(d.reason, DenialReason.INVALID_PATH)

    def test_drive_and_backslash_forms_are_absolute(self) -> None:
        for candidate in ("C:\\Windows", "c:/x", "\\\\server\\share", "\\etc"):
            d = resolve(candidate, self.restricted)
            self.assertEqual(d.reason, DenialReason.ABSOLUTE_PATH_NOT_ALLOWED, candidate)

    def test_backslash_traversal_is_denied(self) -> None:
        d = resolve("a\\..\\b", self.restricted)
        self.assertEqual(d.reason, DenialReason.PARENT_TRAVERSAL_NOT_ALLOWED)

    def test_dot_resolves_to_anchor(self) -> None:
        self.assertEqual(resolve(".", self.restricted), Allowed(resolved=ANCHOR))


class TestPathResolverProperties(unittest.TestCase):
    CANDIDATES = [
        "config.json",
        "a/b/c.txt",
        "./x",
        "..",
        "../x",
        "a/../b",
        "a/..",
        "/etc/passwd",
        "/",
        "deep/./nested/file",
        "name with spaces.txt",
        "..hidden",
        "a..b/c",
    ]

    def setUp(self) -> None:
        self.restricted = AccessPolicy(anchor_dir=ANCHOR, restricted=True)
        self.trusted = AccessPolicy(anchor_dir=ANCHOR, restricted=False)

    def test_traversal_totality(self) -> None:
        for c in ("..", "../x", "a/../b", "a/..", "x/y/../../z"):
            self.assertEqual(resolve(c, self.restricted).reason, DenialReason.PARENT_TRAVERSAL_NOT_ALLOWED, c)

    def test_dotted_names_are_not_traversal(self) -> None:
        for c in ("..hidden", "a..b/c", "file..txt"):
            self.assertIsInstance(resolve(c, self.restricted), Allowed, c)

    def test_unrestricted_permissiveness(self) -> None:
        for c in self.CANDIDATES:
            self.assertIsInstance(resolve(c, self.trusted), Allowed, c)

    def test_containment(self) -> None:
        for c in self.CANDIDATES:
            d = resolve(c, self.restricted)
            if isinstance(d, Allowed):
                self.assertTrue(str(d.resolved).startswith(str(ANCHOR)), c)

    def test_idempotence(self) -> None:
        for c in self.CANDIDATES:
            self.assertEqual(resolve(c, self.restricted), resolve(c, self.restricted))
            self.assertEqual(resolve(c, self.trusted), resolve(c, self.trusted))


class TestAccessPolicy(unittest.TestCase):
    def test_anchor_must_be_absolute(self) -> None:
        with self.assertRaises(ValueError):
            AccessPolicy(anchor_dir=Path("relative/dir"))

    def test_for_template_file_uses_parent(self) -> None:
        p = AccessPolicy.for_template_file(Path("/srv/app/templates/main.j2"))
        self.assertTrue(p.restricted)
        self.assertEqual(p.anchor_dir.name, "templates")

    def test_trust_flag(self) -> None:
        p = AccessPolicy.for_stdin(trust=True)
        self.assertFalse(p.restricted)
        self.assertTrue(p.trust)
        self.assertTrue(p.anchor_dir.is_absolute())


if __name__ == "__main__":
    unittest.main()
