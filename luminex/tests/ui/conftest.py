"""Shared pytest fixtures for UI tests.

pygame runs headless through the SDL ``dummy`` video and audio drivers, so
the board is drawn onto off-screen surfaces only.
"""

from __future__ import annotations

import os
from typing import Generator

import pytest


@pytest.fixture(scope="session", autouse=True)
def configure_headless_environment() -> Generator[None, None, None]:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    yield


@pytest.fixture(scope="session")
def pygame_module(configure_headless_environment):
    from luminex.ui.toolkit import ensure_pygame

    pygame = ensure_pygame()
    pygame.font.init()
    try:
        yield pygame
    finally:
        pygame.quit()
