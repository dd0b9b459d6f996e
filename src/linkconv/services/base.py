"""BaseService — foundation for linkconv services.

Every service receives a :class:`Vault` at construction time. The Vault
provides the file index used for link resolution and document I/O.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from linkconv.infrastructure.filesystem import MARKDOWN_EXTENSION
from linkconv.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from linkconv.infrastructure.vault import Vault


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LinkService(BaseService):
            def convert(self, paths, destination) -> ServiceResult:
                docs = self._collect_documents("convert", paths)
                ...
    """

    def __init__(self, vault: Vault) -> None:
        self._vault = vault

    def _absolute(self, path: Path) -> Path:
        return path if path.is_absolute() else Path.cwd() / path

    def _collect_documents(
        self, op: str, paths: Sequence[Path]
    ) -> list[str] | ServiceResult:
        """Expand *paths* (files or folders) into vault-relative documents.

        No paths means the whole vault. Returns a failed ServiceResult for
        a missing path, a path outside the vault, a non-Markdown file, or
        when nothing is found.
        """
        targets = [self._absolute(p) for p in paths] or [self._vault.root]
        docs: list[str] = []
        for target in targets:
            if not target.exists():
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, f"No such file or folder: {target}"
                )
            try:
                self._vault.relpath(target)
            except ValueError:
                return ServiceResult.failure(
                    op,
                    ErrorCode.NOT_FOUND,
                    f"Path is outside the vault: {target}",
                    vault=str(self._vault.root),
                )
            if target.is_file() and target.suffix != MARKDOWN_EXTENSION:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_MARKDOWN, f"Not a Markdown file: {target}"
                )
            for doc in self._vault.documents_under(target):
                if doc not in docs:
                    docs.append(doc)

        if not docs:
            return ServiceResult.failure(
                op,
                ErrorCode.NO_DOCUMENTS,
                "No Markdown documents found",
                paths=[str(t) for t in targets],
            )
        return docs
