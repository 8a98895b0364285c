# mongo_connection.py
import logging
import os

# MongoDB & Environment
from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from todo_exceptions import StoreError

load_dotenv()

logger = logging.getLogger(__name__)

# MongoDB setup
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/todos")
MONGO_DB = os.getenv("MONGO_DB", "todos")
MONGO_COLLECTION = os.getenv("MONGO_COLLECTION", "todos")
MONGO_CONNECT_TIMEOUT = float(os.getenv("MONGO_CONNECT_TIMEOUT", "30"))


async def connect(uri: str = MONGO_URI, db_name: str = MONGO_DB, timeout: float = MONGO_CONNECT_TIMEOUT):
    """Open the Motor client and make sure the deployment answers.

    Motor connects lazily, so a ``ping`` is issued to surface an unreachable
    server here instead of on the first request. There is no retry.
    """
    timeout_ms = int(timeout * 1000)
    client = None
    try:
        client = AsyncIOMotorClient(
            uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
        await client.admin.command("ping")
    except PyMongoError as e:
        if client is not None:
            client.close()
        raise StoreError(str(e)) from e

    logger.info("Connected to MongoDB database %s", db_name)
    return client, client[db_name]
