from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, InputMediaPhoto, Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from intake.core import prompts


class TelegramTransport:
    """Outbound Telegram calls used by the engine and the forwarder."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send_text(self, chat_id, text, markdown=False):
        parse_mode = ParseMode.MARKDOWN if markdown else None
        await self.bot.send_message(chat_id=chat_id, text=text, parse_mode=parse_mode)

    async def send_skip_prompt(self, chat_id, text):
        keyboard = InlineKeyboardMarkup([
            [InlineKeyboardButton(prompts.SKIP_BUTTON, callback_data=prompts.SKIP_PHOTOS)]
        ])
        await self.bot.send_message(chat_id=chat_id, text=text, reply_markup=keyboard)

    async def send_photo(self, chat_id, file_id, caption):
        await self.bot.send_photo(chat_id=chat_id, photo=file_id, caption=caption)

    async def send_album(self, chat_id, file_ids, caption):
        """Media group of 2-10 photos; the caption rides on the first one."""
        media = [
            InputMediaPhoto(media=file_id, caption=caption if i == 0 else None)
            for i, file_id in enumerate(file_ids)
        ]
        await self.bot.send_media_group(chat_id=chat_id, media=media)

    async def delete_message(self, chat_id, message_id):
        await self.bot.delete_message(chat_id=chat_id, message_id=message_id)


def best_photo_id(photo_sizes):
    """Telegram lists photo sizes smallest first; the last one is the original."""
    if not photo_sizes:
        return None
    return photo_sizes[-1].file_id


async def handle_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start — begin a new request, discarding any in progress."""
    user = update.effective_user
    context.bot_data["engine"].start(
        update.effective_chat.id,
        user.id,
        requester_handle=user.username,
        first_name=user.first_name,
    )


async def handle_cancel(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /cancel."""
    context.bot_data["engine"].cancel(update.effective_chat.id)


async def handle_text(update: Update, context: ContextTypes.DEFAULT_TYPE):
    context.bot_data["engine"].handle_text(update.effective_chat.id, update.message.text)


async def handle_photo(update: Update, context: ContextTypes.DEFAULT_TYPE):
    photo_id = best_photo_id(update.message.photo)
    if photo_id:
        context.bot_data["engine"].handle_attachment(update.effective_chat.id, photo_id)


async def handle_button(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle inline button presses. Always answered so the client stops spinning."""
    query = update.callback_query
    message = query.message
    if message is not None:
        context.bot_data["engine"].handle_button(message.chat.id, query.data, message.message_id)
    await query.answer()


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Polling and handler errors end up here; they never stop the bot."""
    print(f"Telegram error: {context.error}")
