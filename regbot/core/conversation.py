"""Per-user registration form: the session table and the step machine.

A session lives only in process memory. It is created by begin(), advanced
one step per text message by proceed(), and removed once the year step has
run, whether or not the save succeeded. Nothing partial reaches the store.

SessionTable has no locking. Updates for one user must be delivered one at
a time, which python-telegram-bot does unless concurrent_updates is enabled.
"""

import enum
import logging
from dataclasses import dataclass

from regbot.core import prompts
from regbot.memory.records import UserRecord, utcnow

logger = logging.getLogger("regbot")


class Step(enum.Enum):
    AWAITING_NAME = "awaiting_name"
    AWAITING_DEPARTMENT = "awaiting_department"
    AWAITING_YEAR = "awaiting_year"


@dataclass
class ConversationState:
    step: Step
    record: UserRecord


# step -> (record attribute it fills, next step, prompt for the next step)
TRANSITIONS = {
    Step.AWAITING_NAME: ("full_name", Step.AWAITING_DEPARTMENT, prompts.ASK_DEPARTMENT),
    Step.AWAITING_DEPARTMENT: ("department", Step.AWAITING_YEAR, prompts.ASK_YEAR),
    Step.AWAITING_YEAR: ("year", None, None),
}


def advance(state, text):
    """Store text in the field for the current step and move to the next one.

    Returns the prompt for the new step, or None when the form is complete.
    """
    attr, next_step, prompt = TRANSITIONS[state.step]
    setattr(state.record, attr, text)
    if next_step is not None:
        state.step = next_step
    return prompt


class SessionTable:
    """In-progress forms keyed by telegram id. At most one per user."""

    def __init__(self):
        self._sessions = {}

    def start(self, record: UserRecord) -> ConversationState:
        state = ConversationState(Step.AWAITING_NAME, record)
        self._sessions[record.telegram_id] = state
        return state

    def get(self, telegram_id):
        return self._sessions.get(telegram_id)

    def discard(self, telegram_id):
        self._sessions.pop(telegram_id, None)

    def __contains__(self, telegram_id):
        return telegram_id in self._sessions

    def __len__(self):
        return len(self._sessions)


class RegistrationFlow:
    def __init__(self, sessions: SessionTable, store):
        self.sessions = sessions
        self.store = store

    def begin(self, user_id, username="", first_name="", last_name=""):
        """Start (or restart) registration. Any earlier partial form is dropped."""
        record = UserRecord(
            telegram_id=user_id,
            username=username or "",
            first_name=first_name or "",
            last_name=last_name or "",
            joined_at=utcnow(),
        )
        self.sessions.start(record)
        return prompts.ASK_NAME

    async def proceed(self, state: ConversationState, text: str) -> str:
        prompt = advance(state, text)
        if prompt is not None:
            return prompt

        record = state.record
        record.updated_at = utcnow()
        try:
            saved = await self.store.save(record)
        finally:
            self.sessions.discard(record.telegram_id)

        if not saved:
            logger.warning(f"[register] save failed for user {record.telegram_id}")
            return prompts.SAVE_FAILED
        logger.info(f"[register] user {record.telegram_id} completed registration")
        return prompts.registration_complete(record, self.store.label)
