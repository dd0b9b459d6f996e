"""Vault — file index, link resolution, and document I/O.

The Vault is the single dependency injected into every service. It
implements the :class:`~linkconv.domain.types.FileLookup` protocol the
rewrite functions consume, and owns reading and writing documents.

Link resolution follows the note application's "first linkpath
destination" rules:

1. An explicitly relative link (``./``, ``../``) resolves against the
   source document's folder only.
2. A path from the source folder, then from the vault root, with and
   without the ``.md`` extension.
3. Otherwise any file whose path ends with the link (case-insensitive),
   preferring the source folder, then the shortest path.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING

from linkconv.domain.types import VaultFile
from linkconv.infrastructure.filesystem import (
    DEFAULT_SKIP_DIRS,
    MARKDOWN_EXTENSION,
    find_markdown_files,
    find_vault_files,
    read_text,
    write_text,
)
from linkconv.infrastructure.frontmatter import has_frontmatter_key

if TYPE_CHECKING:
    from linkconv.config.settings import LinkSettings

logger = logging.getLogger(__name__)


class Vault:
    """A folder of Markdown notes and attachments.

    The file index is built lazily on first lookup and is never refreshed
    within a run; rewriting links does not add, move, or remove files.
    """

    def __init__(self, settings: LinkSettings) -> None:
        self.settings = settings
        self.root: Path = settings.vault_root
        self._skip_dirs = DEFAULT_SKIP_DIRS | frozenset(settings.vault.skip_dirs)
        self._files: list[VaultFile] | None = None
        self._by_path: dict[str, VaultFile] = {}

    # ------------------------------------------------------------------
    # File index
    # ------------------------------------------------------------------

    def _index(self) -> list[VaultFile]:
        if self._files is None:
            paths = find_vault_files(self.root, skip_dirs=self._skip_dirs)
            self._files = [VaultFile.from_path(self.relpath(p)) for p in paths]
            self._by_path = {f.path.lower(): f for f in self._files}
            logger.debug("Indexed %d files under %s", len(self._files), self.root)
        return self._files

    def list_all_files(self) -> list[VaultFile]:
        """Return every file in the vault, sorted by path."""
        return list(self._index())

    def _exact(self, path: str) -> VaultFile | None:
        self._index()
        key = path.lower()
        return self._by_path.get(key) or self._by_path.get(key + MARKDOWN_EXTENSION)

    def resolve_link(self, target: str, source_path: str) -> VaultFile | None:
        """Return the file *target* refers to from *source_path*, or None.

        A ``#subpath`` suffix on *target* is ignored.
        """
        linkpath = target.split("#", 1)[0].strip()
        if not linkpath:
            return None

        source_dir = posixpath.dirname(source_path)

        if linkpath.startswith("/"):
            return self._exact(linkpath.lstrip("/"))

        if linkpath.startswith(("./", "../")):
            joined = posixpath.normpath(posixpath.join(source_dir, linkpath))
            if joined.startswith(".."):
                return None
            return self._exact(joined)

        if source_dir:
            found = self._exact(posixpath.join(source_dir, linkpath))
            if found is not None:
                return found
        found = self._exact(linkpath)
        if found is not None:
            return found

        return self._by_suffix(linkpath, source_dir)

    def _by_suffix(self, linkpath: str, source_dir: str) -> VaultFile | None:
        key = linkpath.lower()
        suffixes = ("/" + key, "/" + key + MARKDOWN_EXTENSION)
        matches = [
            f
            for f in self._index()
            if f.path.lower().endswith(suffixes)
            or f.path.lower() in (key, key + MARKDOWN_EXTENSION)
        ]
        if not matches:
            return None
        matches.sort(
            key=lambda f: (posixpath.dirname(f.path) != source_dir, len(f.path), f.path)
        )
        return matches[0]

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def relpath(self, path: Path) -> str:
        """Vault-relative POSIX path of *path*.

        Raises:
            ValueError: If *path* is outside the vault.
        """
        return path.resolve().relative_to(self.root.resolve()).as_posix()

    def abspath(self, rel: str) -> Path:
        return self.root / rel

    def documents_under(self, path: Path) -> list[str]:
        """Vault-relative paths of the Markdown documents at or under *path*."""
        if path.is_file():
            return [self.relpath(path)]
        return [
            self.relpath(p) for p in find_markdown_files(path, skip_dirs=self._skip_dirs)
        ]

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def read_document(self, rel: str) -> str:
        return read_text(self.abspath(rel))

    def write_document(self, rel: str, text: str) -> None:
        """Persist *text*, keeping the modification time if configured."""
        write_text(self.abspath(rel), text, keep_mtime=self.settings.links.keep_mtime)

    def skip_reason(self, text: str) -> str | None:
        """Return the frontmatter key that marks *text* as not ours, if any."""
        for key in self.settings.vault.skip_frontmatter_keys:
            if has_frontmatter_key(text, key):
                return key
        return None
