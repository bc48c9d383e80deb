"""
Run Log Module

Accumulates the posts processed during one run and writes them to a single
timestamped JSON file at the end of the run.
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from typing import Dict, List, Optional

from data.models import OriginalPost, PostPair, ReformulatedPost
from utils.helpers import ensure_dir_exists
from utils.logger import get_logger

logger = get_logger(__name__)


class RunBuffer:
    """Append-only mapping of site id to the post pairs processed for that site."""

    def __init__(self):
        self._entries: Dict[str, List[PostPair]] = {}

    def add(self, site_id: str, original: OriginalPost, reformulated: ReformulatedPost) -> None:
        """Record a reformulated post under its site, after any earlier ones."""
        self._entries.setdefault(site_id, []).append(
            PostPair(original=original, reformulated=reformulated)
        )

    def entries(self, site_id: str) -> List[PostPair]:
        return list(self._entries.get(site_id, []))

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return sum(len(pairs) for pairs in self._entries.values())

    def to_dict(self) -> Dict[str, List[dict]]:
        return {
            site_id: [pair.to_dict() for pair in pairs]
            for site_id, pairs in self._entries.items()
        }


def log_file_name(completed_at: datetime) -> str:
    """
    Build the run log file name from the run completion time.

    Uses the ISO-8601 basic format in UTC (e.g. log-20240115T100000.123Z.json),
    which is free of characters that are invalid in Windows file names.
    """
    utc = completed_at.astimezone(timezone.utc)
    return f"log-{utc.strftime('%Y%m%dT%H%M%S')}.{utc.microsecond // 1000:03d}Z.json"


def write_run_log(buffer: RunBuffer, log_dir: str, completed_at: Optional[datetime] = None) -> Optional[str]:
    """
    Write the run buffer to a new JSON file in log_dir.

    Nothing is written when the buffer is empty. The content is written to a
    temporary file in log_dir first and then linked into place, so the log
    file either appears complete or not at all, and an earlier run's log is
    never overwritten.

    Args:
        buffer: The posts processed during the run.
        log_dir: Destination directory, created if missing.
        completed_at: Completion timestamp, defaults to now.

    Returns:
        Optional[str]: Path of the written file, or None if nothing was written.

    Raises:
        FileExistsError: If a log with the same timestamp already exists.
    """
    if buffer.is_empty():
        logger.info("No post processed during this run, skipping log file")
        return None

    content = json.dumps(buffer.to_dict(), indent=2, ensure_ascii=False)

    ensure_dir_exists(log_dir)
    path = os.path.join(log_dir, log_file_name(completed_at or datetime.now(timezone.utc)))

    logger.info(f"Writing run log with {len(buffer)} post(s) to {path}")
    fd, tmp_path = tempfile.mkstemp(prefix=".log-", suffix=".tmp", dir=log_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        # Fails with FileExistsError instead of replacing an existing log
        os.link(tmp_path, path)
    finally:
        os.unlink(tmp_path)

    logger.info("Run log written successfully")
    return path
