"""Append processed jobs to a JSON Lines dataset file with file locking."""
from __future__ import annotations

import fcntl
import json
from pathlib import Path
from typing import Iterable

from culinary_jobs.config import DATA_DIR
from culinary_jobs.log import get_logger
from culinary_jobs.models import Job

log = get_logger(__name__)

DATASET_PATH: Path = DATA_DIR / "jobs.jsonl"


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


class DatasetSink:
    """Fire-and-forget sink: every pushed job becomes one JSON line."""

    def __init__(self, path: Path | str = DATASET_PATH) -> None:
        self.path = Path(path)

    def push(self, jobs: Iterable[Job]) -> int:
        lines = [json.dumps(job.to_record(), ensure_ascii=False) for job in jobs]
        if not lines:
            return 0
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                _lock(f)
                f.write("\n".join(lines) + "\n")
                _unlock(f)
        except OSError as exc:
            log.error("Could not write dataset %s: %s", self.path, exc)
            return 0
        log.info("Saved %d jobs to dataset %s", len(lines), self.path.name)
        return len(lines)

    def read(self) -> list[dict]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            _lock(f, exclusive=False)
            rows = [json.loads(line) for line in f if line.strip()]
            _unlock(f)
        return rows
