"""Workspace manifest editing.

The implementation directory of each year is a uv workspace whose root
``pyproject.toml`` lists one member per day. Edits go through tomlkit so
comments, ordering and whitespace of everything except the member array are
written back exactly as they were read.
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import Array
from tomlkit.toml_document import TOMLDocument

from aoctool.config import Config
from aoctool.errors import AocToolError
from aoctool.utils import print_step

MANIFEST_NAME = "pyproject.toml"
WORKSPACE_TABLE: tuple[str, ...] = ("tool", "uv", "workspace")
MEMBERS_KEY = "members"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ManifestError(AocToolError):
    """Base class for manifest failures."""


class ManifestNotFoundError(ManifestError):
    """Raised when the implementation directory has no manifest."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{MANIFEST_NAME} not found: {path}")


class ManifestParseError(ManifestError):
    """Raised when the manifest is not valid TOML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"could not parse {path}: {reason}")


class MalformedManifestError(ManifestError):
    """Raised when the workspace table or member list has an unexpected shape."""


class ManifestWriteError(ManifestError):
    """Raised when the updated manifest cannot be serialised."""


class MemberAlreadyExistsError(ManifestError):
    """Raised when the member is already listed in the workspace."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"member already exists in workspace: {name}")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def manifest_path(config: Config, year: int) -> Path:
    """Return the path of the workspace manifest for *year*."""
    return config.implementation(year) / MANIFEST_NAME


def read_manifest(path: Path) -> TOMLDocument:
    """Parse the manifest at *path*.

    Raises:
        ManifestNotFoundError: If *path* does not exist.
        ManifestParseError: If the file is not valid TOML.
    """
    if not path.exists():
        raise ManifestNotFoundError(path)
    text = path.read_text(encoding="utf-8")
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ManifestParseError(path, str(exc)) from exc


def load_manifest(config: Config, year: int) -> tuple[Path, TOMLDocument]:
    """Locate and parse the manifest of *year*'s implementation directory."""
    path = manifest_path(config, year)
    return path, read_manifest(path)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def _members_array(
    document: TOMLDocument,
    table: Sequence[str],
    key: str,
    *,
    create: bool,
) -> Array | None:
    """Walk *table* down from the document root and return the *key* array.

    With ``create=True`` missing tables and the array are inserted; otherwise
    ``None`` is returned as soon as something is missing.
    """
    current: MutableMapping = document
    created_table = False
    for depth, segment in enumerate(table):
        if segment not in current:
            if not create:
                return None
            # Intermediate tables are "super tables" so tomlkit emits a single
            # dotted header such as [tool.uv.workspace].
            current[segment] = tomlkit.table(is_super_table=depth < len(table) - 1)
            created_table = depth == len(table) - 1
        child = current[segment]
        if not isinstance(child, MutableMapping):
            raise MalformedManifestError(
                f"expected [{'.'.join(table[: depth + 1])}] to be a table"
            )
        current = child

    if key not in current:
        if not create:
            return None
        current[key] = tomlkit.array()
        if created_table:
            # Blank line before whatever header follows the new table.
            current.add(tomlkit.nl())
    members = current[key]
    if not isinstance(members, Array):
        raise MalformedManifestError(f"expected {'.'.join([*table, key])} to be an array")
    return members


def workspace_members(
    document: TOMLDocument,
    table: Sequence[str] = WORKSPACE_TABLE,
    key: str = MEMBERS_KEY,
) -> list[str]:
    """Return the string entries of the member list (empty if it is absent)."""
    members = _members_array(document, table, key, create=False)
    if members is None:
        return []
    return [item for item in members.unwrap() if isinstance(item, str)]


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


def add_member(
    path: Path,
    document: TOMLDocument,
    name: str,
    table: Sequence[str] = WORKSPACE_TABLE,
    key: str = MEMBERS_KEY,
) -> None:
    """Append *name* to the workspace member list and rewrite *path*.

    The table path and the array are created when absent. The file is only
    written once the new entry has been accepted.

    Raises:
        MalformedManifestError: If a table segment or the list has the wrong type.
        MemberAlreadyExistsError: If *name* is already a member.
        ManifestWriteError: If the document cannot be serialised.
    """
    members = _members_array(document, table, key, create=True)
    assert members is not None  # guaranteed by create=True

    if any(isinstance(item, str) and item == name for item in members):
        raise MemberAlreadyExistsError(name)

    members.append(name)

    try:
        text = tomlkit.dumps(document)
    except (TOMLKitError, TypeError, ValueError) as exc:
        raise ManifestWriteError(f"failed to serialise {path}: {exc}") from exc

    path.write_text(text, encoding="utf-8")
    print_step(f"Registered [bold]{name}[/bold] in {path}")


class ManifestEditor:
    """Convenience wrapper binding a manifest path to the edit helpers."""

    def __init__(
        self,
        path: str | Path,
        table: Sequence[str] = WORKSPACE_TABLE,
        key: str = MEMBERS_KEY,
    ) -> None:
        self.path = Path(path)
        self.table = tuple(table)
        self.key = key

    def members(self) -> list[str]:
        """Return the current member names as stored on disk."""
        return workspace_members(read_manifest(self.path), self.table, self.key)

    def add(self, name: str) -> None:
        """Register *name*, re-reading the file first."""
        document = read_manifest(self.path)
        add_member(self.path, document, name, self.table, self.key)
