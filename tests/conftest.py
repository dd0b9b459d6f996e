"""Shared pytest fixtures and test helpers for linkconv tests."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from linkconv.config.settings import LinkSettings
from linkconv.domain.types import VaultFile
from linkconv.infrastructure.vault import Vault


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of settings discovery."""
    for name in ("LINKCONV_CONFIG", "LINKCONV_VAULT_ROOT", "LINKCONV_LINKS__FINAL_LINK_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers a CLI run bound to CliRunner's temporary streams."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    yield
    root.handlers = handlers
    structlog.reset_defaults()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault with a handful of notes and one attachment.

    Layout::

        Home.md
        a/b/c.md
        a/d/e.md
        a/Home.md          (second "Home.md", makes the name ambiguous)
        people/Ada Lovelace.md
        assets/diagram.png
        .obsidian/app.json (ignored)
    """
    write_note(tmp_path, "Home.md", "# Home\n")
    write_note(tmp_path, "a/b/c.md", "See [[e]].\n")
    write_note(tmp_path, "a/d/e.md", "# E\n\n## Details\n\ntext ^abc\n")
    write_note(tmp_path, "a/Home.md", "# Nested home\n")
    write_note(tmp_path, "people/Ada Lovelace.md", "# Ada\n")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "diagram.png").write_bytes(b"\x89PNG")
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "app.json").write_text("{}")
    return tmp_path


@pytest.fixture
def vault(vault_root: Path) -> Vault:
    """Vault over the temporary vault directory."""
    return Vault(LinkSettings.from_cli(vault_root=vault_root))


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Change CWD to the temp vault so the CLI uses it as vault root.

    Use via ``@pytest.mark.usefixtures("_isolated_vault")`` on command test
    classes. Tests that need the path can also request ``vault_root``.
    """
    monkeypatch.chdir(vault_root)
    yield


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_note(root: Path, rel: str, text: str) -> Path:
    """Write *text* to ``root/rel``, creating folders."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="")
    return path


def read_note(root: Path, rel: str) -> str:
    with (root / rel).open(encoding="utf-8", newline="") as fh:
        return fh.read()


class FakeLookup:
    """In-memory FileLookup: resolves a link by exact path or bare name.

    ``targets`` maps link text (without ``.md``) to a vault path; every
    path in ``files`` is also resolvable by its own path.
    """

    def __init__(self, files: Iterable[str], targets: dict[str, str] | None = None) -> None:
        self.files = [VaultFile.from_path(p) for p in files]
        self.targets = dict(targets or {})
        self.calls: list[tuple[str, str]] = []

    def resolve_link(self, target: str, source_path: str) -> VaultFile | None:
        self.calls.append((target, source_path))
        key = target.removesuffix(".md")
        path = self.targets.get(key)
        for f in self.files:
            if f.path == path or f.path.removesuffix(".md") == key:
                return f
        return None

    def list_all_files(self) -> list[VaultFile]:
        return list(self.files)
