from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tmplkit.bootstrap_operations import DESCRIPTOR_SCHEMA, list_descriptors  # noqa: E402
from tmplkit.contract_store import ContractStore  # noqa: E402


def collect_failures(store: ContractStore) -> List[Tuple[str, List[str]]]:
    failures: List[Tuple[str, List[str]]] = []
    seen_tests = {}
    for d in list_descriptors():
        errs = store.validate(DESCRIPTOR_SCHEMA, d.to_dict())
        if d.test_name is not None:
            other = seen_tests.setdefault(d.test_name, d.name)
            if other != d.name:
                errs.append(f"test name '{d.test_name}' already used by {other}")
        if errs:
            failures.append((d.name, errs))
    return failures


def main() -> int:
    store = ContractStore().load()

    schema_errors = store.check_schemas()
    if schema_errors:
        print("Schema validation failed:")
        for name, err in schema_errors:
            print("- {}: {}".format(name, err))
        return 1

    failures = collect_failures(store)
    for name, errs in failures:
        print("Descriptor {} failed validation:".format(name))
        for e in errs:
            print("  - {}".format(e))
    if failures:
        return 1

    print("Contracts OK ({} operations)".format(len(list_descriptors())))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
