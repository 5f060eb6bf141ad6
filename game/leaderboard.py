"""
Leaderboard - append-only high score store backed by a JSON file
"""

import json
import logging
import math
import os
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path

from utils.constants import (
    LEADERBOARD_FILE, LEADERBOARD_SIZE, MAX_NAME_LENGTH, MAX_SCORE
)

logger = logging.getLogger(__name__)


class InvalidScoreError(ValueError):
    """Raised when a submission breaks the name/score contract"""


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    timestamp: int  # epoch milliseconds


def now_ms():
    return int(datetime.now().timestamp() * 1000)


def validate_submission(name, score):
    """
    Check and normalize a score submission

    Returns:
        (name, score) with the name stripped and the score floored

    Raises:
        InvalidScoreError: name is not a 1-24 char string or score
            is outside 0..MAX_SCORE
    """
    if not isinstance(name, str):
        raise InvalidScoreError("Invalid name")
    name = name.strip()
    if not name or len(name) > MAX_NAME_LENGTH:
        raise InvalidScoreError("Invalid name")

    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        raise InvalidScoreError("Score out of range")
    score = math.floor(score)
    if score < 0 or score > MAX_SCORE:
        raise InvalidScoreError("Score out of range")

    return name, score


class Leaderboard:
    """
    Manages the persistent score list
    """
    def __init__(self, path=LEADERBOARD_FILE, clock=None):
        """
        Args:
            path: JSON file holding all submitted scores
            clock: Optional callable returning epoch ms (for tests)
        """
        self.path = Path(path)
        self.clock = clock or now_ms

    def _read(self):
        """Raw list stored on disk; None when the file exists but is unreadable"""
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Leaderboard unreadable (%s): %s", self.path, e)
            return None

        if not isinstance(raw, list):
            logger.warning("Leaderboard %s is not a list, ignoring it", self.path)
            return None
        return raw

    def _load(self):
        """All valid entries; unreadable data counts as an empty board"""
        entries = []
        for item in self._read() or []:
            try:
                entries.append(ScoreEntry(str(item["name"]), int(item["score"]), int(item["timestamp"])))
            except (KeyError, TypeError, ValueError):
                continue
        return entries

    def _move_aside(self):
        """Keep an unreadable file as <name>.bak instead of writing over it"""
        backup = self.path.with_name(self.path.name + ".bak")
        os.replace(self.path, backup)
        logger.warning("Moved unreadable leaderboard to %s", backup)
        return backup

    def _save(self, items):
        """Write through a temp file so a crash never leaves half a board"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(items, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    def submit(self, name, score):
        """
        Store a score

        Rows already on disk are kept as they are, including ones the
        board cannot read.

        Returns:
            ScoreEntry that was stored

        Raises:
            InvalidScoreError: see validate_submission
            OSError: the board could not be written
        """
        name, score = validate_submission(name, score)
        entry = ScoreEntry(name, score, self.clock())
        items = self._read()
        if items is None:
            self._move_aside()
            items = []
        items.append(asdict(entry))
        self._save(items)
        logger.info("Score submitted: %s - %d", name, score)
        return entry

    def top_scores(self, limit=LEADERBOARD_SIZE):
        """Best scores first; ties go to the earlier submission"""
        entries = sorted(self._load(), key=lambda e: (-e.score, e.timestamp))
        return entries[:limit]

    def rank_for(self, score):
        """1-based position a score would take on the current board"""
        rank = 1
        for entry in self.top_scores():
            if score <= entry.score:
                rank += 1
            else:
                break
        return rank

    def submit_and_get_top(self, name, score):
        """Submit a score and return the refreshed board"""
        self.submit(name, score)
        return self.top_scores()
