"""Shared pytest fixtures for fieldfill tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime

import pytest
from click.testing import CliRunner

from fieldfill import overlay, reset_default_fillers
from fieldfill.infrastructure.overlay import OverlayStore, layered_lookup
from fieldfill.services.filler import Filler

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate the process-wide overlay, filler cache, and FIELDFILL_* env vars."""
    for name in (
        "FIELDFILL_TAG",
        "FIELDFILL_STRICT",
        "FIELDFILL_IMPLICIT_ENV_KEY",
        "FIELDFILL_JSON_OUTPUT",
        "FIELDFILL_VERBOSE",
        "EnvType",
        "APP_ENV",
        "SVC_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    overlay.clear()
    reset_default_fillers()
    yield
    overlay.clear()
    reset_default_fillers()


@pytest.fixture
def store() -> OverlayStore:
    """Private overlay store, not shared with the process-wide one."""
    return OverlayStore()


@pytest.fixture
def filler(store: OverlayStore) -> Filler:
    """Filler reading *store* then os.environ, with the clock pinned to FIXED_NOW."""
    return Filler(lookup=layered_lookup(store), clock=lambda: FIXED_NOW)
