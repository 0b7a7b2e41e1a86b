"""Shared test fixtures for the binsize_tree test suite.

WHY: Most test modules need the same analyzer results: the small
reference scenario whose every number is known, and a richer result with
nested packages, symbols, and several package types.

HOW: Pytest fixtures return fresh copies of raw result dicts (as the
analyzer would emit them) and the parsed Result records.

RULES:
- REFERENCE_RESULT: 1000-byte binary, one section (100 file / 60 known),
  one "main" package "p" of 200 bytes with one 150-byte file
- RICH_RESULT sizes are chosen so every leftover is known in advance
- Fixtures return deep copies; tests may mutate them freely
"""

import copy
from typing import Any, Dict

import pytest

from binsize_tree.records.models import Result


# ---------------------------------------------------------------------------
# Reference scenario
# ---------------------------------------------------------------------------

REFERENCE_RESULT: Dict[str, Any] = {
    "name": "bin",
    "size": 1000,
    "sections": [
        {
            "name": "s1",
            "file_size": 100,
            "known_size": 60,
            "offset": 0x1000,
            "end": 0x1064,
            "addr": 0x401000,
            "addr_end": 0x401064,
            "only_in_memory": False,
            "debug": False,
        },
    ],
    "packages": {
        "p": {
            "name": "p",
            "type": "main",
            "size": 200,
            "files": [{"file_path": "/p/a.go", "size": 150, "pcln_size": 0}],
            "subPackages": {},
            "symbols": [],
        },
    },
}

# ---------------------------------------------------------------------------
# Rich scenario
#
# sections: .text 5000/4000 (1000 unknown), .rodata 3000/3000 (0 unknown)
# packages (key order: fmt, main, net, net/http is nested under net):
#   fmt   std   size 600: fmt/print.go 400 + symbol 100 -> disasm 100
#   main  main  size 300: main.go 300 -> no disasm
#   net   std   size 900: dial.go 200 + net/http (500) -> disasm 200
#     net/http std size 500: server.go 450 -> disasm 50
# result size 4000: 1000 + (600 + 900) + 300 = 2800 -> unknown 1200
# ---------------------------------------------------------------------------

RICH_RESULT: Dict[str, Any] = {
    "name": "server",
    "size": 4000,
    "analyzers": ["dwarf", "symbol", "pclntab"],
    "sections": [
        {
            "name": ".text",
            "file_size": 5000,
            "known_size": 4000,
            "offset": 4096,
            "end": 9096,
            "addr": 4198400,
            "addr_end": 4203400,
            "only_in_memory": False,
            "debug": False,
        },
        {
            "name": ".rodata",
            "file_size": 3000,
            "known_size": 3000,
            "offset": 9096,
            "end": 12096,
            "addr": 4203400,
            "addr_end": 4206400,
            "only_in_memory": False,
            "debug": False,
        },
    ],
    "packages": {
        "fmt": {
            "name": "fmt",
            "type": "std",
            "size": 600,
            "files": [{"file_path": "/usr/lib/go/src/fmt/print.go", "size": 400, "pcln_size": 120}],
            "subPackages": None,
            "symbols": [{"name": "fmt.ppFree", "size": 100, "addr": 5000000, "type": "data"}],
        },
        "main": {
            "name": "main",
            "type": "main",
            "size": 300,
            "files": [{"file_path": "/home/dev/app/main.go", "size": 300}],
            "subPackages": {},
            "symbols": None,
        },
        "net": {
            "name": "net",
            "type": "std",
            "size": 900,
            "files": [{"file_path": "/usr/lib/go/src/net/dial.go", "size": 200, "pcln_size": 0}],
            "subPackages": {
                "http": {
                    "name": "net/http",
                    "type": "std",
                    "size": 500,
                    "files": [
                        {"file_path": "/usr/lib/go/src/net/http/server.go", "size": 450, "pcln_size": 0},
                    ],
                    "subPackages": {},
                    "symbols": [],
                },
            },
            "symbols": [],
        },
    },
}


@pytest.fixture
def reference_result_dict():
    """The reference scenario as raw analyzer JSON."""
    return copy.deepcopy(REFERENCE_RESULT)


@pytest.fixture
def reference_result():
    """The reference scenario as a parsed Result record."""
    return Result.from_dict(copy.deepcopy(REFERENCE_RESULT))


@pytest.fixture
def rich_result_dict():
    return copy.deepcopy(RICH_RESULT)


@pytest.fixture
def rich_result():
    """The rich scenario as a parsed Result record."""
    return Result.from_dict(copy.deepcopy(RICH_RESULT))
