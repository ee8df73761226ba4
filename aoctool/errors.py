"""Exception base class shared by every aoctool module."""

from __future__ import annotations


class AocToolError(Exception):
    """Base class for all errors raised by aoctool.

    Each module defines its own subclasses next to the code that raises them;
    the CLI only needs to catch this type (plus ``OSError``).
    """
