"""Helpers for asserting file ownership hand-over without running as root."""

import os
from pathlib import Path

import pytest


def record_chowns(monkeypatch: pytest.MonkeyPatch) -> dict[Path, int]:
    """Pretend to run as root and record every chown as path -> uid."""
    chowned: dict[Path, int] = {}

    def fake_chown(path: str | Path, uid: int, gid: int) -> None:
        chowned[Path(path)] = uid

    monkeypatch.setattr(os, "geteuid", lambda: 0)
    monkeypatch.setattr(os, "chown", fake_chown)
    return chowned
