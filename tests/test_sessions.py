import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from api.sessions import SessionStore
from reviewer.state import ReviewState, begin_request, settle


class TestSessionStore:
    def test_unknown_session_gets_default_state(self):
        assert SessionStore().get("nobody") == ReviewState()

    def test_update_stores_idle_edits(self):
        store = SessionStore()
        state = ReviewState(code="print(1)", language="python")

        assert store.update("s1", state)
        assert store.get("s1") == state

    def test_only_one_review_can_claim_a_session(self):
        store = SessionStore()
        first = begin_request(ReviewState(code="a = 1", language="python"))
        second = begin_request(ReviewState(code="b = 2", language="python"))

        assert store.update("s1", first)
        assert not store.update("s1", second)
        assert store.get("s1") is first

    def test_edits_wait_for_the_running_review(self):
        store = SessionStore()
        pending = begin_request(ReviewState(code="a = 1", language="python"))
        store.update("s1", pending)

        assert not store.update("s1", ReviewState(code="edited"))

        store.save("s1", settle(pending))
        assert store.update("s1", ReviewState(code="edited"))
        assert store.get("s1").code == "edited"

    def test_sessions_are_independent(self):
        store = SessionStore()
        store.update("s1", begin_request(ReviewState()))

        assert store.update("s2", ReviewState(code="x"))
