"""
pasterbar_services.dedup

Write gate: content already present anywhere in history is never stored again.
"""

from logging import Logger
from typing import Optional

from pasterbar_core.logger import get_logger
from pasterbar_core.store import HistoryStore

from .models import Candidate


class DedupChecker:
    """
    Checks candidates against the full history by exact content equality.

    The comparison is case-sensitive and ignores the entry type, so a path first
    stored as a file reference is still a duplicate when it appears again.
    """

    def __init__(self, store: HistoryStore, logger: Optional[Logger] = None):
        self.store = store
        self.logger = (logger or get_logger()).getChild("DedupChecker")

    def is_duplicate(self, content: str) -> bool:
        return self.store.exists_with_content(content)

    def admit(self, candidate: Candidate) -> bool:
        """True when the candidate has never been recorded."""
        if self.is_duplicate(candidate.content):
            self.logger.debug(f"Skipping duplicate {candidate.type.value} content")
            return False
        return True


__all__ = ["DedupChecker"]
