import logging
from telegram import Update, ReplyKeyboardMarkup
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from regbot.bot.router import FileReply, InboundMessage, Router
from regbot.core.prompts import MENU_LAYOUT

logger = logging.getLogger("regbot")

MENU_KEYBOARD = ReplyKeyboardMarkup(MENU_LAYOUT, resize_keyboard=True)


def to_inbound(update: Update) -> InboundMessage:
    user = update.effective_user
    return InboundMessage(
        user_id=user.id,
        chat_id=update.effective_chat.id,
        text=update.message.text,
        username=user.username or "",
        first_name=user.first_name or "",
        last_name=user.last_name or "",
    )


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle incoming Telegram text messages and commands."""
    if update.message is None or update.effective_user is None:
        return

    router: Router = context.bot_data["router"]
    replies = await router.dispatch(to_inbound(update))

    for reply in replies:
        try:
            if isinstance(reply, FileReply):
                await update.message.reply_document(document=reply.data, filename=reply.filename)
            else:
                await update.message.reply_text(
                    reply.text,
                    parse_mode=ParseMode.MARKDOWN,
                    reply_markup=MENU_KEYBOARD if reply.show_menu else None,
                )
        except Exception as e:
            logger.error(f"[telegram] failed to deliver reply to chat {reply.chat_id}: {e}")


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Log errors raised outside handle_message so polling keeps going."""
    logger.error(f"[telegram] update {update} caused error: {context.error}")
