"""Render link records back into wiki or Markdown literals.

Wiki output is always decoded and never carries the ``.md`` extension.
Markdown output is percent-encoded the way the note application encodes
links and names Markdown notes with their extension.
"""

from __future__ import annotations

from linkconv.domain.encoding import decode_link, encode_link
from linkconv.domain.paths import MARKDOWN_SUFFIX, resolve_target
from linkconv.domain.types import FileLookup, LinkFormat, LinkKind, VaultFile

BLOCK_SIGIL = "^"


def _wiki_alias(alias: str, final_link: str, file: VaultFile | None) -> str:
    # A redundant alias (the link text itself or the note's name) is dropped.
    if not alias or alias == decode_link(final_link):
        return ""
    if file is not None and decode_link(alias) == file.basename:
        return ""
    return f"|{alias}"


def _markdown_extension(final_link: str, file: VaultFile | None) -> str:
    if file is None or file.extension != "md":
        return ""
    if decode_link(final_link).endswith(MARKDOWN_SUFFIX):
        return ""
    return MARKDOWN_SUFFIX


def encode_block_ref(block_ref: str) -> str:
    """Percent-encode a fragment, keeping a leading block sigil literal.

    Examples:
        >>> encode_block_ref("^abc def")
        '^abc%20def'
        >>> encode_block_ref("Some Heading")
        'Some%20Heading'
    """
    if block_ref.startswith(BLOCK_SIGIL):
        return BLOCK_SIGIL + encode_link(block_ref[len(BLOCK_SIGIL) :])
    return encode_link(block_ref)


def render_resolved(
    kind: LinkKind,
    final_link: str,
    alias_or_block_ref: str,
    file: VaultFile | None,
) -> str:
    """Render a link of *kind* whose path has already been computed."""
    if kind == LinkKind.WIKI:
        alias = _wiki_alias(alias_or_block_ref, final_link, file)
        return f"[[{decode_link(final_link)}{alias}]]"

    if kind == LinkKind.MARKDOWN:
        if alias_or_block_ref:
            alias = alias_or_block_ref
        else:
            alias = file.basename if file is not None else final_link
        extension = _markdown_extension(final_link, file)
        return f"[{alias}]({encode_link(final_link)}{extension})"

    if kind == LinkKind.WIKI_TRANSCLUSION:
        return f"[[{decode_link(final_link)}#{decode_link(alias_or_block_ref)}]]"

    extension = _markdown_extension(final_link, file)
    fragment = encode_block_ref(alias_or_block_ref)
    return f"[]({encode_link(final_link)}{extension}#{fragment})"


def render_link(
    kind: LinkKind,
    target_text: str,
    alias_or_block_ref: str,
    source_path: str,
    lookup: FileLookup,
    preference: LinkFormat = LinkFormat.UNCHANGED,
) -> str:
    """Resolve *target_text* and render it as a link of *kind*.

    With :attr:`LinkFormat.UNCHANGED` the target is written as given;
    otherwise a resolvable target is rewritten in the preferred style.
    """
    resolved = resolve_target(target_text, source_path, preference, lookup)
    final_link = target_text if preference == LinkFormat.UNCHANGED else resolved.final_link
    return render_resolved(kind, final_link, alias_or_block_ref, resolved.file)
