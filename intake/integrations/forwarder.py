"""Submission sink: forwards finished requests to the destination chat."""

from telegram.constants import MessageLimit

from intake.core import prompts
from intake.core.tasks import fire_and_forget
from intake.memory.audit_log import format_timestamp


def compose_request_text(submission):
    handle = f"@{submission.requester_handle}" if submission.requester_handle else "no username"
    return (
        f"📋 New request ({format_timestamp(submission.timestamp)})\n"
        f"👤 ID: {submission.requester_id} ({handle})\n"
        f"🔧 Model: {submission.model}\n"
        f"⚠️ Problem: {submission.problem}\n"
        f"📞 Contact: {submission.phone}\n"
        f"🖼️ Photos: {len(submission.attachments)}"
    )


def _utf16_len(text):
    # Telegram measures message limits in UTF-16 code units.
    return len(text.encode("utf-16-le")) // 2


def _truncate(text, limit):
    if _utf16_len(text) <= limit:
        return text
    cut = text[: limit - 1]
    while _utf16_len(cut) > limit - 1:
        cut = cut[:-1]
    return cut + "…"


class SubmissionForwarder:
    def __init__(self, transport, destination_chat_id, audit_log):
        self.transport = transport
        self.destination_chat_id = destination_chat_id
        self.audit_log = audit_log

    def accept(self, submission):
        """Take ownership of a finished request: log it, then deliver in the background."""
        self.audit_log.append(submission)
        return fire_and_forget(self.deliver(submission), label=f"{submission.chat_id} deliver")

    async def deliver(self, submission):
        text = compose_request_text(submission)
        chat_id = submission.chat_id

        if submission.attachments:
            try:
                await self._send_photos(submission.attachments, text)
            except Exception as e:
                print(f"  [{chat_id}] photo delivery failed: {e}")
                # The request text must still reach the service chat without its photos.
                if not await self._send_request_text(chat_id, text):
                    return
                await self.transport.send_text(chat_id, f"{prompts.SUCCESS}\n{prompts.PHOTOS_FAILED}")
                return
        elif not await self._send_request_text(chat_id, text):
            return

        await self.transport.send_text(chat_id, prompts.SUCCESS)

    async def _send_photos(self, attachments, text):
        caption = _truncate(text, MessageLimit.CAPTION_LENGTH)
        if len(attachments) == 1:
            await self.transport.send_photo(self.destination_chat_id, attachments[0], caption)
        else:
            await self.transport.send_album(self.destination_chat_id, list(attachments), caption)

    async def _send_request_text(self, chat_id, text):
        """Send the request as plain text; on failure tell the requester and return False."""
        try:
            await self.transport.send_text(
                self.destination_chat_id, _truncate(text, MessageLimit.MAX_TEXT_LENGTH)
            )
        except Exception as e:
            print(f"  [{chat_id}] request delivery failed: {e}")
            await self.transport.send_text(chat_id, prompts.ERROR)
            return False
        return True
