"""Routes one inbound text message to the form, a command or a menu action.

Transport-agnostic: handlers return TextReply / FileReply actions and the
Telegram adapter delivers them.
"""

import uuid
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from regbot.core import prompts
from regbot.core.conversation import RegistrationFlow, SessionTable
from regbot.core.export import build_csv, export_filename
from regbot.memory.store import RecordStore

logger = logging.getLogger("regbot")


@dataclass
class InboundMessage:
    user_id: int
    chat_id: int
    text: Optional[str]
    username: str = ""
    first_name: str = ""
    last_name: str = ""


@dataclass
class TextReply:
    chat_id: int
    text: str
    show_menu: bool = False


@dataclass
class FileReply:
    chat_id: int
    data: bytes
    filename: str


@dataclass
class BotContext:
    """Process-wide state: the record store, live sessions and the admin allow-list."""

    store: RecordStore
    sessions: SessionTable = field(default_factory=SessionTable)
    admin_ids: frozenset = frozenset()

    def is_admin(self, user_id):
        return user_id in self.admin_ids


class Router:
    def __init__(self, context: BotContext, today=date.today):
        self.context = context
        self.flow = RegistrationFlow(context.sessions, context.store)
        self._today = today
        self.commands = {
            "/start": self.handle_start,
            "/help": self.handle_help,
        }
        self.menu = {
            prompts.REGISTER_LABEL: self.handle_register,
            prompts.MY_INFO_LABEL: self.handle_my_info,
            prompts.ALL_USERS_LABEL: self.handle_all_users,
            prompts.EXPORT_LABEL: self.handle_export,
            prompts.HELP_LABEL: self.handle_help,
        }

    async def dispatch(self, msg: InboundMessage) -> list:
        if not msg.text:
            return []

        trace_id = str(uuid.uuid4())[:8]
        try:
            state = self.context.sessions.get(msg.user_id)
            if state is not None:
                logger.info(f"[{trace_id}] user {msg.user_id} form step {state.step.value}")
                return await self.continue_registration(msg, state)

            if msg.text.startswith("/"):
                handler = self.commands.get(msg.text, self.show_menu)
            else:
                handler = self.menu.get(msg.text, self.show_menu)
            logger.info(f"[{trace_id}] user {msg.user_id} -> {handler.__name__}")
            return await handler(msg)
        except Exception:
            logger.exception(f"[{trace_id}] error handling message from user {msg.user_id}")
            return [TextReply(msg.chat_id, prompts.INTERNAL_ERROR, show_menu=True)]

    async def continue_registration(self, msg, state):
        text = await self.flow.proceed(state, msg.text)
        if msg.user_id in self.context.sessions:
            return [TextReply(msg.chat_id, text)]
        return [TextReply(msg.chat_id, text), TextReply(msg.chat_id, prompts.MAIN_MENU, show_menu=True)]

    async def show_menu(self, msg):
        return [TextReply(msg.chat_id, prompts.MAIN_MENU, show_menu=True)]

    async def handle_start(self, msg):
        return [TextReply(msg.chat_id, prompts.WELCOME), *await self.show_menu(msg)]

    async def handle_help(self, msg):
        text = prompts.help_text(self.context.is_admin(msg.user_id), self.context.store.label)
        return [TextReply(msg.chat_id, text)]

    async def handle_register(self, msg):
        text = self.flow.begin(msg.user_id, msg.username, msg.first_name, msg.last_name)
        return [TextReply(msg.chat_id, text)]

    async def handle_my_info(self, msg):
        record = await self.context.store.get(msg.user_id)
        if record is None:
            return [TextReply(msg.chat_id, prompts.NOT_REGISTERED)]
        return [TextReply(msg.chat_id, prompts.my_info(record, self.context.store.label))]

    async def handle_all_users(self, msg):
        if not self.context.is_admin(msg.user_id):
            return [TextReply(msg.chat_id, prompts.ADMIN_REQUIRED)]

        records = await self.context.store.list_all()
        if not records:
            return [TextReply(msg.chat_id, prompts.NO_USERS)]
        return [TextReply(msg.chat_id, prompts.all_users(records))]

    async def handle_export(self, msg):
        if not self.context.is_admin(msg.user_id):
            return [TextReply(msg.chat_id, prompts.ADMIN_REQUIRED)]

        records = await self.context.store.list_all()
        if not records:
            return [TextReply(msg.chat_id, prompts.NOTHING_TO_EXPORT)]

        today = self._today()
        return [
            FileReply(msg.chat_id, build_csv(records), export_filename(today)),
            TextReply(msg.chat_id, prompts.export_summary(len(records), self.context.store.label, today)),
        ]
