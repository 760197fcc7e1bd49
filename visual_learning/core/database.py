# ============================================================================
# FILE: visual_learning/core/database.py
# ============================================================================
"""Document store handle shared by every resource router"""

from typing import Optional
import logging

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
CLASSES_COLLECTION = "classes"
SELECTIONS_COLLECTION = "selectedClasses"
PAYMENTS_COLLECTION = "payments"


class StoreUnavailable(RuntimeError):
    """Raised when a collection is requested before open() or after close()"""


class DocumentStore:
    """Owns the Mongo client for the lifetime of the application.

    Opened from the app lifespan and closed on shutdown; routes receive it
    through the ``get_store`` dependency instead of importing a global.
    """

    def __init__(self, uri: str, database_name: str):
        self.uri = uri
        self.database_name = database_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_open(self) -> bool:
        return self.db is not None

    def open(self) -> None:
        if self.client is not None:
            return
        self.client = AsyncIOMotorClient(self.uri)
        self.db = self.client[self.database_name]
        logger.info(f"✓ Document store opened (database: {self.database_name})")

    def close(self) -> None:
        if self.client is None:
            return
        self.client.close()
        self.client = None
        self.db = None
        logger.info("✓ Document store closed")

    def collection(self, name: str) -> AsyncIOMotorCollection:
        if self.db is None:
            raise StoreUnavailable("Document store is not open")
        return self.db[name]

    async def ping(self) -> bool:
        """Round-trip to the server, used by the health endpoint"""
        if self.client is None:
            return False
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.error(f"Store ping failed: {e}")
            return False
