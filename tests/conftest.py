"""Shared test fixtures for the asm_block test suite.

WHY: Several test modules need the same fragments and the same fragment
library document. Centralizing them keeps the expected renderings in the
transducer, fragment, library, CLI and API tests consistent.

HOW: Pytest fixtures provide the multiply-add fragment, an MD5-style
round fragment with eight parameters, a library document using both, and
that document written to a temporary JSON file.

RULES:
- Fragment bodies here are the single source of truth for the tests
- File fixtures always live under tmp_path
"""

import json
from typing import Any, Dict

import pytest

from asm_block.core.fragments import Fragment
from asm_block.core.library import FragmentLibrary, library_from_dict

MAD_BODY = "mul $x, $y; lea $x, [$x + $y];"

MD5_ROUND_PARAMS = ["a", "b", "c", "d", "k", "s", "t", "tmp"]

MD5_ROUND_BODY = """
    mov $tmp, $c;
    add $a, $k;
    xor $tmp, $d;
    and $tmp, $b;
    xor $tmp, $d;
    lea $a, [$a + $tmp + $t];
    rol $a, $s;
    add $a, $b;
"""


@pytest.fixture
def mad():
    """Multiply-add fragment: ``mul x, y`` then ``lea x, [x + y]``."""
    return Fragment.from_source("mad", ["x", "y"], MAD_BODY, description="multiply-add")


@pytest.fixture
def md5_round():
    """One MD5 F-round step with eight parameters."""
    return Fragment.from_source("md5_f", MD5_ROUND_PARAMS, MD5_ROUND_BODY)


@pytest.fixture
def library_document() -> Dict[str, Any]:
    return {
        "version": "1",
        "fragments": {
            "mad": {
                "params": ["x", "y"],
                "body": MAD_BODY,
                "description": "multiply-add",
            },
            "md5_f": {
                "params": MD5_ROUND_PARAMS,
                "body": [line.strip() for line in MD5_ROUND_BODY.strip().splitlines()],
            },
            "ret": {
                "body": "ret",
            },
        },
    }


@pytest.fixture
def library(library_document) -> FragmentLibrary:
    return library_from_dict(library_document)


@pytest.fixture
def library_file(tmp_path, library_document):
    path = tmp_path / "fragments.json"
    path.write_text(json.dumps(library_document), encoding="utf-8")
    return path
