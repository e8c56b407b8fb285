#!/usr/bin/env python3
"""Run the ``compile-messages`` build task from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

# Make ``src`` importable without an editable install, as the tests do.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from intlcatalog.backend.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main(["compile-messages", *sys.argv[1:]]))
