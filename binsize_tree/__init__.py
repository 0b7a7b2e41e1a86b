"""Binary size tree: hierarchical size accounting for compiled binaries.

WHY: A size analyzer reports sections, packages, files, and symbols for a
compiled binary, but those records overlap and never add up exactly to the
file size. Readers need a single tree in which every byte sits somewhere,
including the bytes nobody could attribute.

HOW: Three-stage pipeline: load (validated input records), build (core
entry tree with leftover reconciliation), render (pluggable formatters).
Each stage is independently testable.

RULES:
- All formatters consume the same entry tree
- Unattributed bytes surface as synthetic Disasm / Unknown entries
- The entry tree is the stable contract between building and rendering
"""

__version__ = "0.1.0"
