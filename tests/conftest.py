# ruff: noqa: E402

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import commitstyle.log as commitstyle_log


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GITHUB_REPOSITORY", "COMMITSTYLE_LOG_LEVEL", "COMMITSTYLE_NO_COLOR", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(commitstyle_log, "_configured_level", None)
    monkeypatch.setattr(commitstyle_log, "_no_color_override", None)
