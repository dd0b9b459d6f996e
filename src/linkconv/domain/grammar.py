"""Recognizers for the four link kinds.

Each recognizer inspects the text at a single ``[`` and either returns
the span it matched or None. The transclusion test runs before the
plain-link split: a span is a transclusion only when both the file part
before the first ``#`` and the reference after it are non-empty.

Wiki:      ``[[target]]``, ``[[target|alias]]``, ``[[file#ref]]``
Markdown:  ``[alias](target)``, ``[alias](file#ref)``
"""

from __future__ import annotations

from dataclasses import dataclass

from linkconv.domain.types import LinkKind

WEB_PREFIX = "http"


@dataclass(frozen=True)
class SpanMatch:
    """A recognized link span within a text buffer."""

    kind: LinkKind
    start: int
    end: int  # exclusive
    target: str
    alias_or_block_ref: str = ""


def _split_transclusion(target: str) -> tuple[str, str] | None:
    """Return ``(file, ref)`` when *target* carries a non-empty ``#`` fragment."""
    file_part, sep, ref = target.partition("#")
    if sep and file_part and ref:
        return file_part, ref
    return None


def match_wiki(text: str, pos: int) -> SpanMatch | None:
    """Match a wiki link or wiki transclusion starting at *pos*.

    The body runs to the first ``]``, which must be the start of ``]]``.
    """
    if not text.startswith("[[", pos):
        return None
    close = text.find("]", pos + 2)
    if close == -1 or not text.startswith("]]", close):
        return None
    body = text[pos + 2 : close]
    end = close + 2

    parts = _split_transclusion(body)
    if parts is not None:
        return SpanMatch(LinkKind.WIKI_TRANSCLUSION, pos, end, parts[0], parts[1])

    target, _, alias = body.partition("|")
    if not target:
        return None
    return SpanMatch(LinkKind.WIKI, pos, end, target, alias)


def match_markdown(text: str, pos: int) -> SpanMatch | None:
    """Match a Markdown link or Markdown transclusion starting at *pos*.

    The alias runs to the first ``]``, which must be followed by ``(``;
    the target runs to the first ``)``.
    """
    if not text.startswith("[", pos):
        return None
    close = text.find("]", pos + 1)
    if close == -1 or not text.startswith("(", close + 1):
        return None
    paren = text.find(")", close + 2)
    if paren == -1:
        return None
    alias = text[pos + 1 : close]
    target = text[close + 2 : paren]
    end = paren + 1

    parts = _split_transclusion(target)
    if parts is not None:
        return SpanMatch(LinkKind.MD_TRANSCLUSION, pos, end, parts[0], parts[1])

    if not target:
        return None
    return SpanMatch(LinkKind.MARKDOWN, pos, end, target, alias)


def match_link(text: str, pos: int) -> SpanMatch | None:
    """Try every recognizer at *pos*, wiki notation first."""
    return match_wiki(text, pos) or match_markdown(text, pos)


def is_web_link(target: str) -> bool:
    """External web links are never vault references."""
    return target.startswith(WEB_PREFIX)
