"""Tests for :mod:`prismtheme.utils.logging`."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from prismtheme.utils import logging as logging_utils


def test_setup_logging_writes_file_and_console(tmp_path: Path) -> None:
    stream = io.StringIO()

    path = logging_utils.setup_logging(logging.INFO, log_dir=tmp_path, stream=stream, force=True)
    logging.getLogger("prismtheme.test").warning("preference write failed")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert path == tmp_path / "prismtheme.log"
    assert "WARNING  | prismtheme.test | preference write failed" in stream.getvalue()
    assert "preference write failed" in path.read_text(encoding="utf-8")
    assert logging.getLogger("asyncio").level == logging.WARNING


def test_setup_logging_is_idempotent_without_force(tmp_path: Path) -> None:
    first = logging_utils.setup_logging(log_dir=tmp_path / "a", stream=io.StringIO(), force=True)

    second = logging_utils.setup_logging(log_dir=tmp_path / "b", stream=io.StringIO())

    assert second == first
    assert not (tmp_path / "b").exists()


def test_setup_logging_honors_log_dir_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRISMTHEME_LOG_DIR", str(tmp_path / "env"))

    path = logging_utils.setup_logging(stream=io.StringIO(), force=True)

    assert path == tmp_path / "env" / "prismtheme.log"
