from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from intake.core.engine import ConversationEngine
from intake.core.session import Submission

QUIET = 0.05


@pytest.fixture
def transport() -> MagicMock:
    mock = MagicMock()
    mock.send_text = AsyncMock()
    mock.send_skip_prompt = AsyncMock()
    mock.send_photo = AsyncMock()
    mock.send_album = AsyncMock()
    mock.delete_message = AsyncMock()
    return mock


@pytest.fixture
def sink() -> MagicMock:
    return MagicMock()


@pytest.fixture
def engine(transport: MagicMock, sink: MagicMock) -> ConversationEngine:
    return ConversationEngine(transport, sink, QUIET, company_name="Fix-It")


@pytest.fixture
def make_submission():
    return _make_submission


def _make_submission(**overrides) -> Submission:
    fields = dict(
        chat_id=42,
        requester_id=42,
        requester_handle="alice",
        model="Model-X",
        problem="Screen cracked",
        phone="+1-555-0100",
        attachments=(),
        timestamp=datetime(2026, 3, 7, 9, 5),
    )
    fields.update(overrides)
    return Submission(**fields)
