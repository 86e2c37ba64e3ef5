"""Conversation state: one Session per chat, frozen into a Submission at the end."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from intake.core.timer import DebounceTimer


class State(Enum):
    AWAITING_MODEL = "awaiting_model"
    AWAITING_PROBLEM = "awaiting_problem"
    COLLECTING_ATTACHMENTS = "collecting_attachments"
    AWAITING_PHONE = "awaiting_phone"


@dataclass
class Draft:
    requester_id: int
    requester_handle: Optional[str]
    created_at: datetime = field(default_factory=datetime.now)
    model: Optional[str] = None
    problem: Optional[str] = None
    phone: Optional[str] = None
    attachments: list = field(default_factory=list)

    def add_attachment(self, attachment_id):
        """Append unless already present. Returns True if it was new."""
        if attachment_id in self.attachments:
            return False
        self.attachments.append(attachment_id)
        return True


@dataclass
class Session:
    chat_id: int
    draft: Draft
    state: State = State.AWAITING_MODEL
    timer: DebounceTimer = field(default_factory=DebounceTimer)


@dataclass(frozen=True)
class Submission:
    chat_id: int
    requester_id: int
    requester_handle: Optional[str]
    model: str
    problem: str
    phone: str
    attachments: tuple
    timestamp: datetime

    @classmethod
    def from_session(cls, session: Session, timestamp: datetime) -> "Submission":
        draft = session.draft
        return cls(
            chat_id=session.chat_id,
            requester_id=draft.requester_id,
            requester_handle=draft.requester_handle,
            model=draft.model,
            problem=draft.problem,
            phone=draft.phone,
            attachments=tuple(draft.attachments),
            timestamp=timestamp,
        )
