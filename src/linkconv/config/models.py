"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, linkconv.toml only contains
overrides. A vault needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from linkconv.domain.types import LinkFormat

# Frontmatter keys marking documents owned by drawing and board editors.
DEFAULT_SKIP_FRONTMATTER_KEYS = ("excalidraw-plugin", "kanban-plugin")


class LinksConfig(BaseModel):
    """[links] section."""

    model_config = {"frozen": True}

    final_link_format: LinkFormat = LinkFormat.UNCHANGED
    keep_mtime: bool = False


class VaultConfig(BaseModel):
    """[vault] section.

    ``root`` is read relative to the config file and only applies when
    ``--vault`` is not given.
    """

    model_config = {"frozen": True}

    root: Path | None = None
    skip_dirs: list[str] = Field(default_factory=list)
    skip_frontmatter_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_FRONTMATTER_KEYS)
    )
