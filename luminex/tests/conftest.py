from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLIs attach handlers bound to the captured stderr; drop them after each test."""

    yield
    logger = logging.getLogger("luminex")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_save_path(tmp_path, monkeypatch):
    monkeypatch.setenv("LUMINEX_SAVE_PATH", str(tmp_path / "best_scores.json"))
    monkeypatch.delenv("LUMINEX_LEVEL_ROOT", raising=False)
