import logging

from telegram.ext import Application, MessageHandler, filters

from regbot.config import (
    TELEGRAM_BOT_TOKEN, ADMIN_IDS, LOG_LEVEL, WEBHOOK_URL, WEBHOOK_PORT,
    FIREBASE_PROJECT_ID, FIREBASE_PRIVATE_KEY, FIREBASE_CLIENT_EMAIL,
)
from regbot.bot.router import BotContext, Router
from regbot.bot.telegram_handler import handle_message, handle_error
from regbot.memory.store import create_store

logger = logging.getLogger("regbot")


def build_application(token, context: BotContext) -> Application:
    app = Application.builder().token(token).build()
    app.bot_data["router"] = Router(context)
    # Commands go through the router too so unknown ones fall back to the menu
    app.add_handler(MessageHandler(filters.TEXT, handle_message))
    app.add_error_handler(handle_error)
    return app


def main():
    logging.basicConfig(level=LOG_LEVEL, format="[%(asctime)s] %(levelname)s - %(message)s")

    if not TELEGRAM_BOT_TOKEN:
        logger.error("Set TELEGRAM_BOT_TOKEN in .env")
        return

    store = create_store(FIREBASE_PROJECT_ID, FIREBASE_PRIVATE_KEY, FIREBASE_CLIENT_EMAIL)
    context = BotContext(store=store, admin_ids=ADMIN_IDS)

    logger.info("Starting registration bot...")
    logger.info(f"Storage: {store.label}")
    logger.info(f"Admins: {sorted(ADMIN_IDS)}")

    app = build_application(TELEGRAM_BOT_TOKEN, context)

    if WEBHOOK_URL:
        logger.info(f"Bot is running on webhook {WEBHOOK_URL} (port {WEBHOOK_PORT}).")
        app.run_webhook(listen="0.0.0.0", port=WEBHOOK_PORT, webhook_url=WEBHOOK_URL)
    else:
        logger.info("Bot is running. Send a message on Telegram.")
        app.run_polling()


if __name__ == "__main__":
    main()
