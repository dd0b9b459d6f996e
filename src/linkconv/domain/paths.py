"""Path styles for link targets — absolute, relative, shortest.

Paths are vault-relative and ``/``-separated. Markdown notes are
referenced without their ``.md`` extension; attachments keep theirs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from linkconv.domain.encoding import decode_link
from linkconv.domain.types import FileLookup, LinkFormat, VaultFile

MARKDOWN_SUFFIX = ".md"


@dataclass(frozen=True)
class ResolvedLink:
    """The path to write for a link target, and the file it points at."""

    final_link: str
    file: VaultFile | None = None


def _trim(parts: list[str]) -> list[str]:
    """Drop empty leading/trailing segments produced by stray slashes."""
    start = 0
    while start < len(parts) and parts[start] == "":
        start += 1
    end = len(parts)
    while end > start and parts[end - 1] == "":
        end -= 1
    return parts[start:end]


def relative_link(source_path: str, target_path: str) -> str:
    """Path of *target_path* relative to the folder holding *source_path*.

    Examples:
        >>> relative_link("a/b/c.md", "a/d/e.md")
        '../d/e.md'
        >>> relative_link("a/x.md", "a/y.md")
        'y.md'
        >>> relative_link("x.md", "x.md")
        ''
    """
    from_parts = _trim(source_path.split("/"))
    to_parts = _trim(target_path.split("/"))

    common = 0
    for left, right in zip(from_parts, to_parts, strict=False):
        if left != right:
            break
        common += 1

    up = [".."] * max(len(from_parts) - 1 - common, 0)
    return "/".join(up + to_parts[common:])


def strip_markdown_suffix(link: str) -> str:
    if link.endswith(MARKDOWN_SUFFIX):
        return link[: -len(MARKDOWN_SUFFIX)]
    return link


def format_link_path(
    file: VaultFile,
    source_path: str,
    preference: LinkFormat,
    all_files: Sequence[VaultFile] = (),
) -> str:
    """Render *file*'s path in the *preference* style.

    Shortest-path mode uses the bare file name unless another file in
    *all_files* has the same name, in which case the full path is used.

    Raises:
        ValueError: If *preference* is :attr:`LinkFormat.UNCHANGED`.
    """
    if preference == LinkFormat.ABSOLUTE:
        link = file.path
    elif preference == LinkFormat.RELATIVE:
        # A link to the source document itself is written as its file name.
        link = relative_link(source_path, file.path) or file.name
    elif preference == LinkFormat.SHORTEST:
        same_name = sum(1 for f in all_files if f.name == file.name)
        link = file.path if same_name > 1 else file.name
    else:
        msg = f"No path style for {preference!r}"
        raise ValueError(msg)
    return strip_markdown_suffix(link)


def resolve_target(
    target_text: str,
    source_path: str,
    preference: LinkFormat,
    lookup: FileLookup,
    *,
    all_files: Sequence[VaultFile] | None = None,
) -> ResolvedLink:
    """Look up *target_text* and compute the path to write for it.

    Unresolved targets keep their original text. With
    :attr:`LinkFormat.UNCHANGED` the decoded text is returned as is.
    """
    decoded = decode_link(target_text)
    file = lookup.resolve_link(decoded, source_path)
    if file is None:
        return ResolvedLink(final_link=target_text)
    if preference == LinkFormat.UNCHANGED:
        return ResolvedLink(final_link=decoded, file=file)
    if all_files is None and preference == LinkFormat.SHORTEST:
        all_files = lookup.list_all_files()
    return ResolvedLink(
        final_link=format_link_path(file, source_path, preference, all_files or ()),
        file=file,
    )


def resolve_and_format(
    target_text: str,
    source_path: str,
    preference: LinkFormat,
    lookup: FileLookup,
) -> str:
    """Return the path string *target_text* should be rewritten to."""
    return resolve_target(target_text, source_path, preference, lookup).final_link
