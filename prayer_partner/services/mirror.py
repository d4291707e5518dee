"""Best-effort copy of new prayer requests into MongoDB.

Writes are scheduled as detached tasks: delivery is at-most-once and a failed
write is logged and dropped. It never reaches the caller that created the
prayer request.
"""
import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from prayer_partner.config import settings

logger = logging.getLogger(__name__)

COLLECTION_NAME = "prayerrequests"


class DocumentMirror:
    def __init__(self, url: str, database: str, collection: str = COLLECTION_NAME):
        self.url = url
        self.database_name = database
        self.collection_name = collection
        self._client: Optional[AsyncIOMotorClient] = None
        self._pending: set[asyncio.Task] = set()

    def _collection(self):
        if self._client is None:
            self._client = AsyncIOMotorClient(self.url, serverSelectionTimeoutMS=5000)
        return self._client[self.database_name][self.collection_name]

    async def write(self, username: str, category_id: int, title: str) -> None:
        document = {"username": username, "categoryId": category_id, "title": title}
        await self._collection().insert_one(document)
        logger.info("Prayer request mirrored to MongoDB for user=%s category=%s", username, category_id)

    async def _write_quietly(self, username: str, category_id: int, title: str) -> None:
        try:
            await self.write(username, category_id, title)
        except Exception:
            logger.exception("Mirror write failed for user=%s category=%s", username, category_id)

    def schedule(self, username: str, category_id: int, title: str) -> asyncio.Task:
        task = asyncio.create_task(self._write_quietly(username, category_id, title))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for scheduled writes to finish."""
        if self._pending:
            await asyncio.gather(*self._pending)

    async def close(self) -> None:
        await self.drain()
        if self._client is not None:
            self._client.close()
            self._client = None


class NullMirror:
    """Used when no MongoDB URL is configured."""

    def schedule(self, username: str, category_id: int, title: str) -> None:
        logger.debug("Mirror disabled, skipping prayer request copy for user=%s", username)

    async def drain(self) -> None:
        return None

    async def close(self) -> None:
        return None


def build_mirror(url: str | None = None, database: str | None = None):
    url = settings.mongodb_url if url is None else url
    if not url:
        return NullMirror()
    return DocumentMirror(url, database or settings.mongodb_database)


mirror = build_mirror()
