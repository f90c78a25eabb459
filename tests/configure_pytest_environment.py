"""Run the Link Brandyler test suites from a plain checkout.

Usage:
    python tests/configure_pytest_environment.py [pytest args]

Installs the project with its ``test`` extra when pytest or PyQt6 is missing,
points ``LINK_BRANDYLER_SETTINGS`` at a path that does not exist so a local
``brandyler_settings.json`` cannot leak into assertions, and then runs pytest
over the configured test paths (or the arguments given).
"""
from __future__ import annotations

import importlib.util
import os
import subprocess
import sys
from pathlib import Path
from typing import Iterable, List

ROOT_DIR = Path(__file__).resolve().parents[1]
REQUIRED_MODULES = ("pytest", "PyQt6")
SETTINGS_ENV_VAR = "LINK_BRANDYLER_SETTINGS"


def missing_modules(names: Iterable[str] = REQUIRED_MODULES) -> List[str]:
    return [name for name in names if importlib.util.find_spec(name) is None]


def install_test_extra(root: Path = ROOT_DIR) -> int:
    command = [sys.executable, "-m", "pip", "install", "-e", f"{root}[test]"]
    print("Installing test dependencies: " + " ".join(command), file=sys.stderr)
    return subprocess.run(command, check=False).returncode


def isolate_settings(root: Path = ROOT_DIR) -> None:
    os.environ.setdefault(SETTINGS_ENV_VAR, str(root / "tests" / ".no_settings.json"))


def main(argv: List[str]) -> int:
    if str(ROOT_DIR) not in sys.path:
        sys.path.insert(0, str(ROOT_DIR))

    absent = missing_modules()
    if absent:
        returncode = install_test_extra()
        if returncode != 0 or missing_modules():
            print(f"Still missing {', '.join(absent)}; install them manually and retry.", file=sys.stderr)
            return returncode or 1

    isolate_settings()
    import pytest  # type: ignore

    # testpaths from pyproject.toml only apply when pytest starts in the root.
    os.chdir(ROOT_DIR)
    return pytest.main(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
