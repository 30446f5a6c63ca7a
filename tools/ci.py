#!/usr/bin/env python3
# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, catalog smoke test and build."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

EXAMPLE_CATALOG = "docs/examples/blog.yaml"

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=typegraph", "--cov-report=term-missing"]),
    ("Catalog check", ["uv", "run", "typegraph", "check", EXAMPLE_CATALOG]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run all CI steps and report results."""
    results: list[tuple[str, bool, float]] = []

    for name, cmd in STEPS:
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _banner("  Summary")
    failed = 0
    for name, passed, elapsed in results:
        if passed:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            failed += 1
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s)"))

    print()
    if failed:
        print(chalk.red(f"{failed} of {len(results)} step(s) failed"))
    return 1 if failed else 0


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    sys.exit(main())
