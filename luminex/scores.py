"""Best move counts per level, persisted as a small JSON map."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class BestScoreStore:
    """Maps a level index to the fewest moves used to complete it.

    With ``path=None`` the store lives in memory only.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self.scores: Dict[int, int] = {}
        if self.path is not None and self.path.exists():
            self.scores = self._read(self.path)

    @staticmethod
    def _read(path: Path) -> Dict[int, int]:
        try:
            data = json.loads(path.read_text())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable best score file %s: %s", path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed best score file %s", path)
            return {}
        scores: Dict[int, int] = {}
        for key, value in data.items():
            try:
                scores[int(key)] = int(value)
            except (TypeError, ValueError):
                logger.warning("Skipping best score entry %r=%r in %s", key, value, path)
        return scores

    def get(self, level_index: int) -> Optional[int]:
        return self.scores.get(level_index)

    def record(self, level_index: int, moves: int) -> bool:
        """Store ``moves`` if it beats the previous best. Returns True when it does."""

        previous = self.scores.get(level_index)
        if previous is not None and previous <= moves:
            return False
        self.scores[level_index] = moves
        logger.info("New best for level %d: %d moves", level_index, moves)
        self.save()
        return True

    def save(self) -> None:
        if self.path is None:
            return
        payload = {str(key): value for key, value in sorted(self.scores.items())}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2) + "\n")
        except OSError as exc:
            logger.warning("Could not save best scores to %s: %s", self.path, exc)
