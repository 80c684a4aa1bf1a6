from pasterbar_core.constants import ClipboardType
from pasterbar_services.dedup import DedupChecker
from pasterbar_services.models import Candidate


def test_unseen_content_is_admitted(store):
    checker = DedupChecker(store)
    assert not checker.is_duplicate("hello")
    assert checker.admit(Candidate(content="hello", type=ClipboardType.TEXT))


def test_seen_content_is_rejected_for_any_type(store):
    store.insert("/tmp/a.png", ClipboardType.IMAGE)
    checker = DedupChecker(store)
    assert checker.is_duplicate("/tmp/a.png")
    assert not checker.admit(Candidate(content="/tmp/a.png", type=ClipboardType.FILE))
    assert not checker.admit(Candidate(content="/tmp/a.png", type=ClipboardType.TEXT))


def test_dedup_is_a_pure_read(store):
    checker = DedupChecker(store)
    checker.admit(Candidate(content="hello", type=ClipboardType.TEXT))
    checker.is_duplicate("hello")
    assert store.count() == 0
