from typing import Optional

from intake.core.session import Session


class ConversationStore:
    """In-progress sessions keyed by chat id.

    Removing or replacing a session always cancels its debounce timer, so a
    stale fire can never reach a destroyed or reused session.
    """

    def __init__(self):
        self._sessions = {}

    def get(self, chat_id) -> Optional[Session]:
        return self._sessions.get(chat_id)

    def put(self, chat_id, session: Session):
        previous = self._sessions.get(chat_id)
        if previous is not None and previous is not session:
            previous.timer.cancel()
        self._sessions[chat_id] = session

    def remove(self, chat_id):
        session = self._sessions.pop(chat_id, None)
        if session is not None:
            session.timer.cancel()
        return session

    def clear(self):
        for chat_id in list(self._sessions):
            self.remove(chat_id)

    def __contains__(self, chat_id):
        return chat_id in self._sessions

    def __len__(self):
        return len(self._sessions)
