"""Link extraction — scan text for wiki and Markdown links.

Pure functions, no infrastructure dependencies. Consumed by the rewrite
orchestrator and by ``linkconv links`` for inspection.
"""

from __future__ import annotations

from dataclasses import dataclass

from linkconv.domain.grammar import is_web_link, match_link
from linkconv.domain.types import LinkKind


@dataclass(frozen=True)
class LinkRecord:
    """One link occurrence found in a text buffer."""

    kind: LinkKind
    raw_match: str  # exact original text of the link
    target_text: str  # still percent-encoded where the source had escapes
    alias_or_block_ref: str  # alias for plain links, fragment for transclusions
    source_file_path: str
    start: int
    end: int

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": str(self.kind),
            "match": self.raw_match,
            "target": self.target_text,
            "alias_or_block_ref": self.alias_or_block_ref,
            "start": self.start,
            "end": self.end,
        }


def extract_links(text: str, source_file_path: str = "") -> list[LinkRecord]:
    """Extract every wiki and Markdown link from *text*, in document order.

    Spans never overlap: scanning resumes after each recognized link.
    Web links (targets starting with ``http``) are skipped but their span
    is still consumed. Text that fails every recognizer is ordinary text.
    Returns an empty list if no links are found.
    """
    records: list[LinkRecord] = []
    pos = text.find("[")
    while pos != -1:
        span = match_link(text, pos)
        if span is None:
            pos = text.find("[", pos + 1)
            continue
        if not is_web_link(span.target):
            records.append(
                LinkRecord(
                    kind=span.kind,
                    raw_match=text[span.start : span.end],
                    target_text=span.target,
                    alias_or_block_ref=span.alias_or_block_ref,
                    source_file_path=source_file_path,
                    start=span.start,
                    end=span.end,
                )
            )
        pos = text.find("[", span.end)
    return records
