"""Link kinds, notations, path formats, and the vault file descriptor.

The four link kinds split into two notation families (wiki and
Markdown). Each family has a plain variant and a transclusion variant
that carries a block or heading reference after ``#``.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class Notation(StrEnum):
    """Link notation family — also the destination of a conversion."""

    WIKI = "wiki"
    MARKDOWN = "markdown"


class LinkKind(StrEnum):
    """The four recognized link kinds."""

    MARKDOWN = "markdown"
    WIKI = "wiki"
    MD_TRANSCLUSION = "md_transclusion"
    WIKI_TRANSCLUSION = "wiki_transclusion"

    @property
    def notation(self) -> Notation:
        if self in (LinkKind.WIKI, LinkKind.WIKI_TRANSCLUSION):
            return Notation.WIKI
        return Notation.MARKDOWN

    @property
    def is_transclusion(self) -> bool:
        return self in (LinkKind.MD_TRANSCLUSION, LinkKind.WIKI_TRANSCLUSION)

    def in_notation(self, notation: Notation) -> LinkKind:
        """Return the kind with the same shape (plain/transclusion) in *notation*."""
        if notation == Notation.WIKI:
            return LinkKind.WIKI_TRANSCLUSION if self.is_transclusion else LinkKind.WIKI
        return LinkKind.MD_TRANSCLUSION if self.is_transclusion else LinkKind.MARKDOWN


class LinkFormat(StrEnum):
    """Path style applied to every rewritten link."""

    UNCHANGED = "unchanged"
    RELATIVE = "relative-path"
    ABSOLUTE = "absolute-path"
    SHORTEST = "shortest-path"


@dataclass(frozen=True)
class VaultFile:
    """A file known to the vault, addressed by its vault-relative path."""

    path: str  # "folder/Note.md", always "/"-separated
    name: str  # "Note.md"
    basename: str  # "Note"
    extension: str  # "md", "" when there is none

    @classmethod
    def from_path(cls, path: str) -> VaultFile:
        """Build a descriptor from a vault-relative POSIX path."""
        name = posixpath.basename(path)
        stem, dot, ext = name.rpartition(".")
        if not dot or not stem:
            return cls(path=path, name=name, basename=name, extension="")
        return cls(path=path, name=name, basename=stem, extension=ext)


class FileLookup(Protocol):
    """Collaborator that maps link targets to vault files."""

    def resolve_link(self, target: str, source_path: str) -> VaultFile | None:
        """Return the first file *target* refers to from *source_path*, or None."""
        ...

    def list_all_files(self) -> list[VaultFile]:
        """Return every file in the vault."""
        ...
