import sys

from telegram.ext import Application, CallbackQueryHandler, CommandHandler, MessageHandler, filters

from intake import config
from intake.bot.telegram_handler import (
    TelegramTransport,
    handle_button,
    handle_cancel,
    handle_error,
    handle_photo,
    handle_start,
    handle_text,
)
from intake.core.engine import ConversationEngine
from intake.core.tasks import drain
from intake.integrations.forwarder import SubmissionForwarder
from intake.memory.audit_log import AuditLog


def build_application(token, destination_chat_id, quiet_period, audit_log_path):
    app = Application.builder().token(token).post_stop(_on_stop).build()

    transport = TelegramTransport(app.bot)
    sink = SubmissionForwarder(transport, destination_chat_id, AuditLog(audit_log_path))
    app.bot_data["engine"] = ConversationEngine(
        transport,
        sink,
        quiet_period,
        company_name=config.COMPANY_NAME,
        company_url=config.COMPANY_URL,
    )

    app.add_handler(CommandHandler("start", handle_start))
    app.add_handler(CommandHandler("cancel", handle_cancel))
    app.add_handler(MessageHandler(filters.PHOTO, handle_photo))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_text))
    app.add_handler(CallbackQueryHandler(handle_button))
    app.add_error_handler(handle_error)
    return app


async def _on_stop(app: Application):
    engine = app.bot_data.get("engine")
    if engine is not None:
        print(f"Shutting down, dropping {len(engine.store)} open request(s)")
        engine.store.clear()
    await drain()


def main():
    try:
        config.check_required()
    except config.ConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print("Starting repair intake bot...")
    print(f"Destination chat: {config.TELEGRAM_CHAT_ID}")
    print(f"Photo quiet period: {config.QUIET_PERIOD_SECONDS}s")
    print(f"Audit log: {config.AUDIT_LOG_PATH}")

    app = build_application(
        config.TELEGRAM_BOT_TOKEN,
        config.TELEGRAM_CHAT_ID,
        config.QUIET_PERIOD_SECONDS,
        config.AUDIT_LOG_PATH,
    )

    print("🤖 Bot is running. Press Ctrl+C to stop.")
    app.run_polling()
    print("Bot stopped")


if __name__ == "__main__":
    main()
