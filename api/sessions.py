import threading
import uuid

from reviewer.state import ReviewState


class SessionStore:
    """Review state per browser session, kept in memory only.

    While a session's stored state is ``loading`` only the review that
    claimed it may write to it.
    """

    def __init__(self):
        self._states = {}
        self._lock = threading.Lock()

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())

    def get(self, session_id: str) -> ReviewState:
        with self._lock:
            return self._states.get(session_id) or ReviewState()

    def update(self, session_id: str, state: ReviewState) -> bool:
        """Store ``state`` unless a review is running. Returns whether it was stored.

        A pending review claims the session this way, so two reviews can
        never both be in flight for it.
        """
        with self._lock:
            current = self._states.get(session_id)
            if current is not None and current.loading:
                return False
            self._states[session_id] = state
            return True

    def save(self, session_id: str, state: ReviewState) -> None:
        with self._lock:
            self._states[session_id] = state
