"""Conversation engine: the per-chat intake state machine.

Every entry point mutates session state synchronously and only schedules
outbound sends, so a transition always completes before the next update or
timer fire is looked at. Sends run as fire-and-forget tasks and never call
back into the engine.
"""

import traceback
from contextlib import contextmanager
from datetime import datetime

from intake.core import prompts
from intake.core.session import Draft, Session, State, Submission
from intake.core.store import ConversationStore
from intake.core.tasks import fire_and_forget


class ConversationEngine:
    def __init__(self, transport, sink, quiet_period, company_name="", company_url="", store=None):
        self.transport = transport
        self.sink = sink
        self.quiet_period = quiet_period
        self.company_name = company_name
        self.company_url = company_url
        self.store = store if store is not None else ConversationStore()

    # ── commands ─────────────────────────────────

    def start(self, chat_id, requester_id, requester_handle=None, first_name=None):
        """Drop whatever the chat had in progress and open a fresh request."""
        with self._processing(chat_id):
            self.store.remove(chat_id)
            session = Session(chat_id=chat_id, draft=Draft(requester_id, requester_handle))
            self.store.put(chat_id, session)
            print(f"  [{chat_id}] new request from {requester_id} (@{requester_handle})")
            self._send(
                chat_id,
                prompts.welcome(first_name, self.company_name, self.company_url),
                markdown=True,
            )

    def cancel(self, chat_id):
        with self._processing(chat_id):
            if self.store.remove(chat_id) is not None:
                print(f"  [{chat_id}] request cancelled")
            self._send(chat_id, prompts.CANCELLED)

    # ── inbound events ───────────────────────────

    def handle_text(self, chat_id, text):
        session = self.store.get(chat_id)
        if session is None or not text or text.startswith("/"):
            return
        text = text.strip()
        if not text:
            return

        with self._processing(chat_id):
            if session.state is State.AWAITING_MODEL:
                session.draft.model = text
                session.state = State.AWAITING_PROBLEM
                self._send(chat_id, prompts.ASK_PROBLEM)
            elif session.state is State.AWAITING_PROBLEM:
                session.draft.problem = text
                session.state = State.COLLECTING_ATTACHMENTS
                fire_and_forget(
                    self.transport.send_skip_prompt(chat_id, prompts.ASK_PHOTOS),
                    label=str(chat_id),
                )
            elif session.state is State.AWAITING_PHONE:
                session.draft.phone = text
                self._finish(session)

    def handle_attachment(self, chat_id, attachment_id):
        session = self.store.get(chat_id)
        if session is None or session.state is not State.COLLECTING_ATTACHMENTS:
            return

        with self._processing(chat_id):
            if not session.draft.add_attachment(attachment_id):
                return
            print(f"  [{chat_id}] photo {len(session.draft.attachments)} received")
            session.timer.arm(self.quiet_period, lambda: self._on_quiet(chat_id, session))

    def handle_button(self, chat_id, data, message_id=None):
        """Returns True if the button press moved the conversation forward."""
        session = self.store.get(chat_id)
        if (
            session is None
            or data != prompts.SKIP_PHOTOS
            or session.state is not State.COLLECTING_ATTACHMENTS
        ):
            return False

        with self._processing(chat_id):
            session.timer.cancel()
            self._ask_phone(session)
            if message_id is not None:
                fire_and_forget(
                    self.transport.delete_message(chat_id, message_id),
                    label=f"{chat_id} delete",
                )
        return True

    # ── internals ────────────────────────────────

    def _on_quiet(self, chat_id, session):
        # The timer is cancelled whenever the session leaves the store, but a
        # replaced session must never be advanced by its predecessor's fire.
        if self.store.get(chat_id) is not session:
            return
        if session.state is not State.COLLECTING_ATTACHMENTS:
            return
        with self._processing(chat_id):
            print(f"  [{chat_id}] quiet for {self.quiet_period}s, "
                  f"{len(session.draft.attachments)} photo(s)")
            self._ask_phone(session)

    def _ask_phone(self, session):
        session.state = State.AWAITING_PHONE
        self._send(session.chat_id, prompts.ASK_PHONE)

    def _finish(self, session):
        submission = Submission.from_session(session, datetime.now())
        self.sink.accept(submission)
        self.store.remove(session.chat_id)
        print(f"  [{session.chat_id}] request submitted")

    def _send(self, chat_id, text, markdown=False):
        fire_and_forget(self.transport.send_text(chat_id, text, markdown=markdown), label=str(chat_id))

    @contextmanager
    def _processing(self, chat_id):
        try:
            yield
        except Exception as e:
            print(f"  [{chat_id}] processing error: {e}")
            traceback.print_exc()
            self.store.remove(chat_id)
            self._send(chat_id, prompts.ERROR)
