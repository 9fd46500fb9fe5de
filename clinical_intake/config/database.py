"""MongoDB database connection and management."""

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database as MongoDatabase
from typing import Optional
from clinical_intake.config.settings import settings
import logging

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: Optional[MongoClient] = None
    database: Optional[MongoDatabase] = None

    @classmethod
    def connect_db(cls):
        """Connect to MongoDB."""
        try:
            cls.client = MongoClient(settings.mongodb_uri)
            cls.database = cls.client[settings.mongodb_database]

            # Test connection
            cls.client.admin.command("ping")
            logger.info(f"Connected to MongoDB: {settings.mongodb_database}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    @classmethod
    def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls.database = None
            logger.info("Closed MongoDB connection")

    @classmethod
    def get_database(cls) -> MongoDatabase:
        """Get database instance."""
        if cls.database is None:
            raise RuntimeError("Database not initialized. Call connect_db() first.")
        return cls.database

    @classmethod
    def get_collection(cls, collection_name: str) -> Collection:
        """Get a collection from the database."""
        db = cls.get_database()
        return db[collection_name]


def get_sessions_collection() -> Collection:
    """Get intake_sessions collection."""
    return Database.get_collection(settings.mongodb_collection_sessions)
