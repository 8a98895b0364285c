from typing import List
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from helper import parse_todo_id, serialize_todo
from todo_exceptions import StoreError, TodoNotFound


class TodoStore:
    """CRUD over one MongoDB collection of todo records.

    Takes a Motor collection; the client's own pool makes it safe to share
    across concurrent requests. Records go in and out as plain dicts in the
    JSON record shape (see ``helper.serialize_todo``).
    """

    def __init__(self, collection, client=None):
        self.collection = collection
        self.client = client

    async def list_all(self) -> List[dict]:
        """Every todo, in whatever order MongoDB returns them"""
        try:
            todos = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return [serialize_todo(todo) for todo in todos]

    async def insert(self, text: str = "", completed: bool = False) -> dict:
        todo_document = {
            "text": text,
            "completed": completed,
        }
        try:
            result = await self.collection.insert_one(todo_document)
            # read the record back so the response reflects what was stored
            created = await self.collection.find_one({"_id": result.inserted_id})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if created is None:
            raise StoreError(f"inserted todo {result.inserted_id} could not be read back")
        return serialize_todo(created)

    async def find_by_id(self, todo_id: str) -> dict:
        oid = parse_todo_id(todo_id)
        try:
            todo = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if todo is None:
            raise TodoNotFound(todo_id)
        return serialize_todo(todo)

    async def update_by_id(self, todo_id: str, text: str = "", completed: bool = False) -> dict:
        """Overwrite text and completed; the id is never touched"""
        oid = parse_todo_id(todo_id)
        try:
            todo = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": {"text": text, "completed": completed}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if todo is None:
            raise TodoNotFound(todo_id)
        return serialize_todo(todo)

    async def delete_by_id(self, todo_id: str) -> int:
        oid = parse_todo_id(todo_id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        # no distinction between already deleted and never existed
        if result.deleted_count < 1:
            raise TodoNotFound(todo_id)
        return result.deleted_count

    def close(self):
        if self.client is not None:
            self.client.close()
