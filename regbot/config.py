"""Configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()


def parse_admin_ids(raw):
    return frozenset(int(uid.strip()) for uid in (raw or "").split(",") if uid.strip())


# Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
ADMIN_IDS = parse_admin_ids(os.getenv("ADMIN_IDS", ""))

# Webhook (polling when WEBHOOK_URL is empty)
WEBHOOK_URL = os.getenv("WEBHOOK_URL", "")
WEBHOOK_PORT = int(os.getenv("WEBHOOK_PORT", "8443"))

# Firebase (in-memory storage when the key or client email is missing)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID", "")
FIREBASE_PRIVATE_KEY = os.getenv("FIREBASE_PRIVATE_KEY", "").replace("\\n", "\n")
FIREBASE_CLIENT_EMAIL = os.getenv("FIREBASE_CLIENT_EMAIL", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
