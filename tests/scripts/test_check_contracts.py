import io
import unittest
from contextlib import redirect_stdout


class TestCheckContracts(unittest.TestCase):
    def test_shipped_descriptors_pass(self) -> None:
        # Import lazily so tests clearly fail if module is missing.
        from scripts.check_contracts import main

        buf = io.StringIO()
        with redirect_stdout(buf):
            rc = main()
        self.assertEqual(rc, 0, buf.getvalue())
        self.assertIn("Contracts OK", buf.getvalue())


if __name__ == "__main__":
    unittest.main()
