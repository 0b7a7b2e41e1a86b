"""Abstract base formatter and output container.

WHY: Every output format consumes the same entry tree but produces
different file content. This base class enforces a consistent interface
so the CLI and API layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements, a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; current formatters return one item
- ``suffix`` starts with a hyphen, e.g. ``"-tree.json"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from binsize_tree.core.entry import BaseEntry


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-tree.txt"`` → ``"server-tree.txt"``.
        content: The file content as a string.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Text Tree'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """Suffix of the (first) output file, e.g. '-tree.txt'."""

    @abstractmethod
    def format(self, root: BaseEntry) -> list[FormatterOutput]:
        """Render an entry tree into one or more output files.

        Args:
            root: The tree root, normally the ResultEntry from build_tree().

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string, and MIME type.
        """
