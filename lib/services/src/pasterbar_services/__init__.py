"""
Services package for the pasterbar clipboard history watcher.

Clipboard access, classification, deduplication, change detection, and the
history feed, wired together by ClipboardManager.
"""

from .classifier import ContentClassifier, ImageMaterializer  # noqa: F401
from .clipboard import ClipboardBackend, MemoryClipboard, SystemClipboard  # noqa: F401
from .dedup import DedupChecker  # noqa: F401
from .detector import ChangeDetector  # noqa: F401
from .feed import HistoryFeed  # noqa: F401
from .manager import ClipboardManager  # noqa: F401
from .models import Candidate, ClipboardPayload  # noqa: F401
from .scheduler import PeriodicTask  # noqa: F401
