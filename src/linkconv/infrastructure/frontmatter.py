"""YAML frontmatter parsing.

Used to recognize documents owned by other editors (drawings, boards)
that store their data in a Markdown file and must never be rewritten.
"""

from __future__ import annotations

import logging
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)

_FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh safe YAML parser (YAML objects are stateful)."""
    return YAML(typ="safe", pure=True)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter and body from markdown content.

    Expects the file to start with ``---`` on the first line. The second
    ``---`` closes the YAML block. Everything after is the body.

    Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no valid
        frontmatter delimiters are found, returns ``({}, content)``.

    Raises:
        YAMLError: If the frontmatter block is not valid YAML.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    loaded = _new_yaml().load(yaml_block)
    fm: dict[str, Any] = loaded if isinstance(loaded, dict) else {}
    return fm, body


def has_frontmatter_key(content: str, key: str) -> bool:
    """True when the frontmatter sets *key* to a truthy value.

    Unparseable frontmatter counts as absent.
    """
    try:
        fm, _body = parse_frontmatter(content)
    except YAMLError:
        logger.debug("Unparseable frontmatter while checking %r", key, exc_info=True)
        return False
    return bool(fm.get(key))
