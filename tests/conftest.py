from __future__ import annotations

import pytest
from click.testing import CliRunner

from termgrid.layout.terminal import AnsiColorMapper

_ENV_VARS = ("NO_COLOR", "TERMGRID_FORCE_COLOR", "COLORTERM", "TERM", "WT_SESSION", "TERMGRID_CONFIG")


@pytest.fixture(autouse=True)
def _clean_color_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep colour detection deterministic regardless of the developer's shell."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def plain_mapper() -> AnsiColorMapper:
    """A mapper that never emits escape codes."""

    return AnsiColorMapper(no_color=True)


@pytest.fixture
def ansi16_mapper() -> AnsiColorMapper:
    """A mapper pinned to the basic 16-colour palette."""

    return AnsiColorMapper(capability="16")


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()
