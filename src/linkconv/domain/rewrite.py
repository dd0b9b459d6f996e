"""Rewrite orchestration — notation conversion and path reformatting.

Both operations are pure functions of (text, source document, lookup,
preference). Each recognized link is replaced at the span captured during
extraction, applied back-to-front so earlier offsets stay valid. Two
identical links are therefore each rewritten at their own site.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from linkconv.domain.links import LinkRecord, extract_links
from linkconv.domain.paths import resolve_target
from linkconv.domain.serializer import render_link, render_resolved
from linkconv.domain.types import FileLookup, LinkFormat, Notation


@dataclass(frozen=True)
class Replacement:
    """The new literal for one extracted link."""

    record: LinkRecord
    text: str

    @property
    def changed(self) -> bool:
        return self.text != self.record.raw_match


def apply_replacements(text: str, replacements: Iterable[Replacement]) -> str:
    """Splice every replacement into *text* at its recorded span."""
    result = text
    for rep in sorted(replacements, key=lambda r: r.record.start, reverse=True):
        result = result[: rep.record.start] + rep.text + result[rep.record.end :]
    return result


def plan_conversion(
    text: str,
    source_path: str,
    destination: Notation,
    lookup: FileLookup,
    preference: LinkFormat = LinkFormat.UNCHANGED,
) -> list[Replacement]:
    """Render every link of the other notation family in *destination*.

    Links already in *destination* notation are left out of the plan.
    """
    plan: list[Replacement] = []
    for record in extract_links(text, source_path):
        if record.kind.notation == destination:
            continue
        rendered = render_link(
            record.kind.in_notation(destination),
            record.target_text,
            record.alias_or_block_ref,
            source_path,
            lookup,
            preference,
        )
        plan.append(Replacement(record=record, text=rendered))
    return plan


def plan_reformat(
    text: str,
    source_path: str,
    preference: LinkFormat,
    lookup: FileLookup,
) -> list[Replacement]:
    """Re-render every resolvable link in its own kind with a new path style."""
    if preference == LinkFormat.UNCHANGED:
        return []
    all_files = lookup.list_all_files() if preference == LinkFormat.SHORTEST else ()
    plan: list[Replacement] = []
    for record in extract_links(text, source_path):
        resolved = resolve_target(
            record.target_text, source_path, preference, lookup, all_files=all_files
        )
        if resolved.file is None:
            continue
        rendered = render_resolved(
            record.kind, resolved.final_link, record.alias_or_block_ref, resolved.file
        )
        plan.append(Replacement(record=record, text=rendered))
    return plan


def convert_notation(
    text: str,
    source_path: str,
    destination: Notation,
    lookup: FileLookup,
    preference: LinkFormat = LinkFormat.UNCHANGED,
) -> str:
    """Convert every link in *text* to *destination* notation."""
    return apply_replacements(
        text, plan_conversion(text, source_path, destination, lookup, preference)
    )


def reformat_paths(
    text: str,
    source_path: str,
    preference: LinkFormat,
    lookup: FileLookup,
) -> str:
    """Rewrite the path of every resolvable link in *text* to *preference* style.

    Non-resolving links and :attr:`LinkFormat.UNCHANGED` leave *text* as is.
    """
    return apply_replacements(text, plan_reformat(text, source_path, preference, lookup))
