"""Percent coding for link targets.

Decoding follows ``decodeURI``: escapes of URI reserved characters stay
encoded, so a ``%23`` in a file name never turns into a fragment
separator. Encoding follows the note application's own convention, which
escapes only a handful of characters and leaves ``#``, ``%`` and ``?``
literal so transclusion fragments survive.
"""

from __future__ import annotations

import re

_ESCAPE_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")
_RESERVED = frozenset(";/?:@&=+$,#")
_ENCODE_PATTERN = re.compile(r"[\\\x00\x08\x0B\x0C\x0E-\x1F ]")


def _decode_run(match: re.Match[str]) -> str:
    run = match.group(0)
    out: list[str] = []
    pending: list[str] = []

    def flush() -> None:
        if not pending:
            return
        raw = bytes(int(token[1:], 16) for token in pending)
        try:
            out.append(raw.decode("utf-8"))
        except UnicodeDecodeError:
            out.append("".join(pending))
        pending.clear()

    for i in range(0, len(run), 3):
        token = run[i : i + 3]
        byte = int(token[1:], 16)
        if byte < 0x80 and chr(byte) in _RESERVED:
            flush()
            out.append(token)
        else:
            pending.append(token)
    flush()
    return "".join(out)


def decode_link(text: str) -> str:
    """Decode percent-escapes in *text*.

    Malformed or non-UTF-8 sequences are kept as written; never raises.

    Examples:
        >>> decode_link("My%20Note")
        'My Note'
        >>> decode_link("a%23b")
        'a%23b'
        >>> decode_link("100%")
        '100%'
    """
    if "%" not in text:
        return text
    return _ESCAPE_RUN.sub(_decode_run, text)


def encode_link(text: str) -> str:
    """Percent-encode the characters the note application escapes in links.

    Examples:
        >>> encode_link("My Note.md")
        'My%20Note.md'
        >>> encode_link("a#b?c%")
        'a#b?c%'
    """
    return _ENCODE_PATTERN.sub(lambda m: f"%{ord(m.group(0)):02X}", text)
