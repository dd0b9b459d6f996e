"""Filesystem operations for vault documents.

INVARIANT: Files are truth. Every run re-reads documents from disk and
rebuilds the file index; nothing is cached between invocations.

Documents are read and written with ``newline=""`` so line endings
survive a rewrite byte for byte.
"""

from __future__ import annotations

import os
from pathlib import Path

MARKDOWN_EXTENSION = ".md"

# Directories never treated as vault content.
DEFAULT_SKIP_DIRS = frozenset({".obsidian", ".git", ".trash", ".linkconv"})


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_text(path: Path) -> str:
    """Read a document, preserving its line endings."""
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


def write_text(path: Path, text: str, *, keep_mtime: bool = False) -> None:
    """Write *text* to *path*.

    With *keep_mtime*, the file's access and modification times are
    restored after the write.
    """
    stat = path.stat() if keep_mtime and path.exists() else None
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    if stat is not None:
        os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns))


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _is_skipped(path: Path, root: Path, skip_dirs: frozenset[str]) -> bool:
    rel_parts = path.relative_to(root).parts[:-1]
    return any(part in skip_dirs for part in rel_parts)


def find_vault_files(
    root: Path,
    *,
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
) -> list[Path]:
    """Discover every file under *root* (notes and attachments).

    Skips files inside any directory named in *skip_dirs*.
    """
    if not root.is_dir():
        return []
    results = [
        path
        for path in root.rglob("*")
        if path.is_file() and not _is_skipped(path, root, skip_dirs)
    ]
    return sorted(results)


def find_markdown_files(
    root: Path,
    *,
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
) -> list[Path]:
    """Discover all Markdown documents under *root*, sorted by path."""
    return [
        path
        for path in find_vault_files(root, skip_dirs=skip_dirs)
        if path.suffix == MARKDOWN_EXTENSION
    ]
