from __future__ import annotations

import pytest

from cogbump.cli.context import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Registered with monkeypatch so values set by --config are undone.
    monkeypatch.setenv(CONFIG_ENV_VAR, "")
