import logging
from pathlib import Path
from typing import Iterable

from scribebot.constants import (
    EXCLUDE_FILE,
    MSG_EXCLUDE_LOADED,
    MSG_EXCLUDE_MISSING,
    MSG_EXCLUDE_UNREADABLE,
)

logger = logging.getLogger(__name__)


def normalize_sender(s: str) -> str:
    return s.strip().casefold()


class ExclusionFilter:
    """Senders whose audio is never transcribed. Read-only once built."""

    def __init__(self, senders: Iterable[str] = ()) -> None:
        self._excluded = frozenset(
            filter(None, map(normalize_sender, senders))
        )

    def __len__(self) -> int:
        return len(self._excluded)

    def is_excluded(self, sender_id: str) -> bool:
        return normalize_sender(sender_id) in self._excluded

    @classmethod
    def load(cls, path: Path = Path(EXCLUDE_FILE)) -> "ExclusionFilter":
        """One sender id per line. A missing or unreadable file excludes nobody."""
        match path.exists():
            case False:
                logger.warning(MSG_EXCLUDE_MISSING, path)
                return cls()
            case True:
                try:
                    lines = path.read_text(encoding="utf-8").splitlines()
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning(MSG_EXCLUDE_UNREADABLE, path, exc)
                    return cls()
        excluded = cls(lines)
        logger.info(MSG_EXCLUDE_LOADED, len(excluded), path)
        return excluded
