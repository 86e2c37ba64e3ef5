"""Configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    """Required configuration is missing or invalid; the bot must not start."""


def _seconds(raw):
    """Parse a positive number of seconds; None if the value is unusable."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


# Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_CHAT_ID = os.getenv("TELEGRAM_CHAT_ID", "")

# Intake flow
QUIET_PERIOD_RAW = os.getenv("QUIET_PERIOD_SECONDS", "5")
QUIET_PERIOD_SECONDS = _seconds(QUIET_PERIOD_RAW)
COMPANY_NAME = os.getenv("COMPANY_NAME", "our service center")
COMPANY_URL = os.getenv("COMPANY_URL", "")

# Audit log
AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", "./data/logs/requests.txt")

REQUIRED = ("TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID")


def check_required():
    """Raise ConfigError listing every required setting that is empty or invalid."""
    problems = []
    missing = [name for name in REQUIRED if not globals()[name]]
    if missing:
        problems.append(f"Set {', '.join(missing)} in .env")
    if QUIET_PERIOD_SECONDS is None:
        problems.append(f"QUIET_PERIOD_SECONDS must be a positive number, got {QUIET_PERIOD_RAW!r}")
    if problems:
        raise ConfigError("; ".join(problems))
