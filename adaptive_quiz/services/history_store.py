import json
import logging
import os
import re
from datetime import datetime
from typing import List, Optional
from ..config import settings
from ..models import AttemptRecord

logger = logging.getLogger("adaptive_quiz")

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")

class ScoreHistoryStore:
    """Per-user attempt history, one JSON line per finished quiz."""

    def __init__(self, base_dir: Optional[str] = None) -> None:
        self.base_dir = os.path.abspath(base_dir or settings.history_dir)
        os.makedirs(self.base_dir, exist_ok=True)

    def _path(self, username: str) -> str:
        name = (username or "").strip()
        if not name:
            raise ValueError("username must not be empty")
        return os.path.join(self.base_dir, f"history_{_UNSAFE.sub('_', name)}.jsonl")

    def add_score(self, username: str, score: int, total: int, category: str) -> AttemptRecord:
        now = datetime.now()
        record = AttemptRecord(
            username=username,
            score=score,
            total=total,
            percentage=int(score * 100 / total + 0.5) if total else 0,
            category=category,
            date=now.strftime("%Y-%m-%d %H:%M:%S"),
            timestamp=int(now.timestamp() * 1000),
        )
        with open(self._path(username), "a", encoding="utf-8") as f:
            f.write(record.model_dump_json() + "\n")
        logger.debug({"event": "history_saved", "username": username, "score": score, "total": total})
        return record

    def get_history(self, username: str) -> List[AttemptRecord]:
        path = self._path(username)
        if not os.path.exists(path):
            return []
        attempts: List[AttemptRecord] = []
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    attempts.append(AttemptRecord.model_validate(json.loads(line)))
                except ValueError:
                    logger.warning({"event": "history_line_skipped", "username": username})
        return attempts
