"""User interface package for the puzzle."""

from .main import PuzzleApp, bootstrap_directories, main
from .toolkit import PuzzleUI

__all__ = [
    "PuzzleApp",
    "PuzzleUI",
    "bootstrap_directories",
    "main",
]
