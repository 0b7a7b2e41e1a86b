"""Configuration constants, policy names, and .env loading.

WHY: Two behaviors of the tree builder are choices rather than facts:
the iteration order of package mappings and what to do when children
outgrow their parent. Those, plus server and CLI defaults, live here so
they are easy to find and override.

HOW: python-dotenv loads the .env file on import. Defaults are module
constants read from the environment. The resolve_* helpers turn an
optional override into a validated policy name with a clear error.

RULES:
- PACKAGE_ORDERS: "name" (lexicographic by mapping key) or "input"
  (document order)
- NEGATIVE_LEFTOVER_POLICIES: "ignore", "warn" (log), "error" (raise)
- All defaults can be overridden via BINSIZE_TREE_* environment variables
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()

# ---------------------------------------------------------------------------
# Tree building policies
# ---------------------------------------------------------------------------

PACKAGE_ORDERS = ("name", "input")
NEGATIVE_LEFTOVER_POLICIES = ("ignore", "warn", "error")

DEFAULT_PACKAGE_ORDER = os.getenv("BINSIZE_TREE_PACKAGE_ORDER", "name").strip().lower()
DEFAULT_NEGATIVE_LEFTOVER = os.getenv("BINSIZE_TREE_NEGATIVE_LEFTOVER", "warn").strip().lower()

# ---------------------------------------------------------------------------
# CLI and API defaults
# ---------------------------------------------------------------------------

DEFAULT_FORMATS = os.getenv("BINSIZE_TREE_DEFAULT_FORMATS", "text_tree")
API_HOST = os.getenv("BINSIZE_TREE_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("BINSIZE_TREE_API_PORT", "8000"))


def resolve_package_order(value: Optional[str] = None) -> str:
    """Return a validated package iteration order.

    RULES:
    - None falls back to DEFAULT_PACKAGE_ORDER
    - Raises ValueError for anything outside PACKAGE_ORDERS
    """
    order = (value if value is not None else DEFAULT_PACKAGE_ORDER).strip().lower()
    if order not in PACKAGE_ORDERS:
        raise ValueError(
            "Unknown package order '{}'. Expected one of: {}".format(
                order, ", ".join(PACKAGE_ORDERS)
            )
        )
    return order


def resolve_negative_leftover(value: Optional[str] = None) -> str:
    """Return a validated negative-leftover policy (see resolve_package_order)."""
    policy = (value if value is not None else DEFAULT_NEGATIVE_LEFTOVER).strip().lower()
    if policy not in NEGATIVE_LEFTOVER_POLICIES:
        raise ValueError(
            "Unknown negative leftover policy '{}'. Expected one of: {}".format(
                policy, ", ".join(NEGATIVE_LEFTOVER_POLICIES)
            )
        )
    return policy
