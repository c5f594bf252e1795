"""Pytest configuration to isolate tests from a local nf_builder database.

Sets NF_BUILDER_DB before nf_builder is imported so any connection opened
without an explicit path lands in a test-specific SQLite file.
"""

import os
from pathlib import Path

TEST_DB_PATH = Path("nf_builder_tests.db").absolute()
os.environ.setdefault("NF_BUILDER_DB", str(TEST_DB_PATH))

TEST_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
