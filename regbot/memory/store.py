"""Record Store: uniform get/put/list over a durable or an in-memory backend.

The backend is picked once by create_store() at startup and never changes.
Backend errors stop here: save() reports False, get() returns None and
list_all() returns an empty list, so a failed write turns into a
"please try again" reply instead of a crashed update.
"""

import logging
from abc import ABC, abstractmethod

from google.cloud import firestore

from regbot.memory.records import UserRecord, utcnow

logger = logging.getLogger("regbot")

USERS_COLLECTION = "users"


class RecordStore(ABC):
    label = "Unknown"

    @abstractmethod
    async def save(self, record: UserRecord) -> bool:
        ...

    @abstractmethod
    async def get(self, telegram_id: int):
        ...

    @abstractmethod
    async def list_all(self) -> list:
        ...


class MemoryStore(RecordStore):
    """Process-lifetime store. Cleared on restart."""

    label = "Memory"

    def __init__(self):
        self._users = {}

    async def save(self, record: UserRecord) -> bool:
        try:
            self._users[record.telegram_id] = record.copy(updated_at=utcnow())
            logger.info(f"[store] user {record.telegram_id} saved to memory")
            return True
        except Exception as e:
            logger.error(f"[store] error saving user {record.telegram_id}: {e}")
            return False

    async def get(self, telegram_id: int):
        record = self._users.get(telegram_id)
        return record.copy() if record else None

    async def list_all(self) -> list:
        return [r.copy() for r in self._users.values()]


class FirestoreStore(RecordStore):
    """Firestore-backed store. Expects a google.cloud.firestore.AsyncClient."""

    label = "Firebase"

    def __init__(self, client, collection=USERS_COLLECTION):
        self._client = client
        self._collection = collection

    def _doc(self, telegram_id):
        return self._client.collection(self._collection).document(str(telegram_id))

    async def save(self, record: UserRecord) -> bool:
        doc = record.to_document()
        # Firestore stamps the write time server-side
        doc["updatedAt"] = firestore.SERVER_TIMESTAMP
        try:
            await self._doc(record.telegram_id).set(doc)
            logger.info(f"[store] user {record.telegram_id} saved to Firebase")
            return True
        except Exception as e:
            logger.error(f"[store] error saving user {record.telegram_id}: {e}")
            return False

    async def get(self, telegram_id: int):
        try:
            snapshot = await self._doc(telegram_id).get()
            if not snapshot.exists:
                return None
            return UserRecord.from_document(snapshot.to_dict(), snapshot.id)
        except Exception as e:
            logger.error(f"[store] error getting user {telegram_id}: {e}")
            return None

    async def list_all(self) -> list:
        records = []
        try:
            async for snapshot in self._client.collection(self._collection).stream():
                try:
                    records.append(UserRecord.from_document(snapshot.to_dict(), snapshot.id))
                except (KeyError, TypeError, ValueError) as e:
                    logger.error(f"[store] skipping unreadable user document {snapshot.id}: {e}")
        except Exception as e:
            logger.error(f"[store] error listing users: {e}")
            return []
        return records


def _init_firestore(project_id, private_key, client_email):
    import firebase_admin
    from firebase_admin import credentials, firestore_async

    cred = credentials.Certificate({
        "type": "service_account",
        "project_id": project_id,
        "private_key": private_key,
        "client_email": client_email,
        "token_uri": "https://oauth2.googleapis.com/token",
    })
    app = firebase_admin.initialize_app(cred, {"projectId": project_id})
    return firestore_async.client(app)


def create_store(project_id=None, private_key=None, client_email=None, client_factory=_init_firestore):
    """Pick the backend for this process from the configured credentials."""
    if not (private_key and client_email):
        logger.warning("[store] Firebase credentials not set, using in-memory storage")
        return MemoryStore()

    try:
        client = client_factory(project_id, private_key, client_email)
    except Exception as e:
        logger.error(f"[store] Firebase initialization failed: {e}")
        return MemoryStore()

    logger.info("[store] Firebase initialized successfully")
    return FirestoreStore(client)
