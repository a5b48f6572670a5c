from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for reports, lock files and configuration.
"""

import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
SAMPLE_CSV = textwrap.dedent("""\
    sections,symbols,vmsize,filesize
    .text,llrt_utils::clone::structured_clone,100,90
    .text,llrt_modules::fs::read_file,50,40
    .text,<url::Url>::set_password,30,30
    .text,<u8 as <[_]>::to_vec_in::ConvertVec>::to_vec::<>,8,8
    .rodata,llrt::main,20,20
    .text,[1848 Others],500,400
    .data,,4,0
""")

SAMPLE_LOCK = textwrap.dedent("""\
    version = 3

    [[package]]
    name = "llrt"
    version = "0.1.0"
    dependencies = [
     "llrt_modules",
     "llrt_utils",
    ]

    [[package]]
    name = "llrt_modules"
    version = "0.1.0"
    dependencies = [
     "llrt_utils",
     "url 2.5.0",
    ]

    [[package]]
    name = "llrt_utils"
    version = "0.1.0"

    [[package]]
    name = "url"
    version = "2.5.0"
    source = "registry+https://github.com/rust-lang/crates.io-index"
    dependencies = [
     "form-urlencoded",
    ]

    [[package]]
    name = "form-urlencoded"
    version = "1.2.1"
    source = "registry+https://github.com/rust-lang/crates.io-index"
""")


@pytest.fixture
def sample_csv() -> str:
    """Return a small bloaty report mixing crate, primitive and aggregate rows."""
    return SAMPLE_CSV


@pytest.fixture
def lock_file(tmp_path: Path) -> Path:
    """
    Write a Cargo.lock describing:

        llrt -> llrt_modules -> llrt_utils
        llrt -> llrt_utils
        llrt_modules -> url -> form_urlencoded
    """
    path = tmp_path / "Cargo.lock"
    path.write_text(SAMPLE_LOCK, encoding="utf-8")
    return path


@pytest.fixture
def base_config(lock_file: Path) -> Dict[str, Any]:
    """Return a complete configuration pointing at the sample lock file."""
    return {
        "output_name": "bloaty",
        "lock_path": str(lock_file),
        "max_depth": 0,
        "no_sections": False,
    }
