"""LinkService — convert notation and reformat paths across documents.

Documents are processed strictly one at a time in sorted path order.
Writes are not transactional: a run interrupted halfway leaves the
documents already handled rewritten and the rest untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from linkconv.config.logging import get_logger
from linkconv.domain.encoding import decode_link
from linkconv.domain.links import extract_links
from linkconv.domain.rewrite import (
    Replacement,
    apply_replacements,
    plan_conversion,
    plan_reformat,
)
from linkconv.domain.types import LinkFormat, Notation
from linkconv.services.base import BaseService
from linkconv.services.result import ErrorCode, ServiceResult

log = get_logger(__name__)

Planner = Callable[[str, str], list[Replacement]]


class LinkService(BaseService):
    """Rewrite links in vault documents."""

    def _preference(self, preference: LinkFormat | None) -> LinkFormat:
        if preference is None:
            return self._vault.settings.links.final_link_format
        return preference

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    def convert(
        self,
        paths: Sequence[Path],
        destination: Notation,
        *,
        preference: LinkFormat | None = None,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Convert every link in the documents under *paths* to *destination*.

        No *paths* means the whole vault.
        """
        pref = self._preference(preference)

        def planner(text: str, rel: str) -> list[Replacement]:
            return plan_conversion(text, rel, destination, self._vault, pref)

        result = self._rewrite_documents("convert", paths, planner, dry_run=dry_run)
        if result.ok:
            data = {"destination": str(destination), "format": str(pref), **result.data}
            result = result.model_copy(update={"data": data})
        return result

    def reformat(
        self,
        paths: Sequence[Path],
        preference: LinkFormat | None = None,
        *,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Rewrite the path of every resolvable link to *preference* style."""
        pref = self._preference(preference)
        if pref == LinkFormat.UNCHANGED:
            return ServiceResult.failure(
                "reformat",
                ErrorCode.INVALID_FORMAT,
                "Choose a link format: relative-path, absolute-path or shortest-path",
            )

        def planner(text: str, rel: str) -> list[Replacement]:
            return plan_reformat(text, rel, pref, self._vault)

        result = self._rewrite_documents("reformat", paths, planner, dry_run=dry_run)
        if result.ok:
            result = result.model_copy(update={"data": {"format": str(pref), **result.data}})
        return result

    def _rewrite_documents(
        self,
        op: str,
        paths: Sequence[Path],
        planner: Planner,
        *,
        dry_run: bool,
    ) -> ServiceResult:
        docs = self._collect_documents(op, paths)
        if isinstance(docs, ServiceResult):
            return docs

        warnings: list[str] = []
        files: list[dict[str, Any]] = []
        skipped: list[dict[str, str]] = []
        unchanged = 0

        for rel in docs:
            try:
                text = self._vault.read_document(rel)
            except (OSError, UnicodeDecodeError) as exc:
                log.warning("document.unreadable", path=rel, error=str(exc))
                warnings.append(f"Could not read {rel}: {exc}")
                continue

            reason = self._vault.skip_reason(text)
            if reason is not None:
                log.info("document.skipped", path=rel, reason=reason)
                skipped.append({"path": rel, "reason": reason})
                continue

            plan = planner(text, rel)
            changed = sum(1 for rep in plan if rep.changed)
            if changed == 0:
                unchanged += 1
                continue

            if not dry_run:
                try:
                    self._vault.write_document(rel, apply_replacements(text, plan))
                except OSError as exc:
                    log.warning("document.unwritable", path=rel, error=str(exc))
                    warnings.append(f"Could not write {rel}: {exc}")
                    continue

            log.debug(f"document.{op}", path=rel, links=changed, dry_run=dry_run)
            files.append({"path": rel, "links": changed})

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "dry_run": dry_run,
                "documents": len(docs),
                "changed": len(files),
                "unchanged": unchanged,
                "links": sum(f["links"] for f in files),
                "files": files,
                "skipped": skipped,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Single-buffer operations
    # ------------------------------------------------------------------

    def convert_text(
        self,
        text: str,
        source: Path,
        destination: Notation,
        *,
        preference: LinkFormat | None = None,
    ) -> ServiceResult:
        """Convert the links in *text* as if it were part of *source*.

        *source* need not exist; it only anchors relative link resolution.
        """
        target = self._absolute(source)
        try:
            rel = self._vault.relpath(target)
        except ValueError:
            return ServiceResult.failure(
                "convert_text", ErrorCode.NOT_FOUND, f"Path is outside the vault: {target}"
            )

        plan = plan_conversion(text, rel, destination, self._vault, self._preference(preference))
        return ServiceResult(
            ok=True,
            op="convert_text",
            data={
                "source": rel,
                "destination": str(destination),
                "links": sum(1 for rep in plan if rep.changed),
                "text": apply_replacements(text, plan),
            },
        )

    def list_links(self, path: Path) -> ServiceResult:
        """List the links found in one document and the files they resolve to."""
        docs = self._collect_documents("links", [path])
        if isinstance(docs, ServiceResult):
            return docs
        if len(docs) != 1:
            return ServiceResult.failure(
                "links", ErrorCode.NOT_MARKDOWN, f"Expected a single document: {path}"
            )

        rel = docs[0]
        try:
            text = self._vault.read_document(rel)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("document.unreadable", path=rel, error=str(exc))
            return ServiceResult.failure(
                "links", ErrorCode.UNREADABLE, f"Could not read {rel}: {exc}", path=rel
            )
        items: list[dict[str, Any]] = []
        for record in extract_links(text, rel):
            resolved = self._vault.resolve_link(decode_link(record.target_text), rel)
            items.append({**record.to_dict(), "resolved": resolved.path if resolved else None})
        return ServiceResult(
            ok=True,
            op="links",
            data={"path": rel, "count": len(items), "items": items},
        )
