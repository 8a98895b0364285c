import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from helper import parse_todo_id, serialize_todo
from server import create_app
from todo_exceptions import StoreError, TodoNotFound


class InMemoryTodoStore:
    """Dict-backed stand-in honouring the same contract as todo_store.TodoStore."""

    def __init__(self):
        self.docs = {}
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise StoreError(self.fail_with)

    async def list_all(self):
        self._check()
        return [serialize_todo(doc) for doc in self.docs.values()]

    async def insert(self, text="", completed=False):
        self._check()
        oid = ObjectId()
        self.docs[oid] = {"_id": oid, "text": text, "completed": completed}
        return serialize_todo(self.docs[oid])

    async def find_by_id(self, todo_id):
        oid = parse_todo_id(todo_id)
        self._check()
        if oid not in self.docs:
            raise TodoNotFound(todo_id)
        return serialize_todo(self.docs[oid])

    async def update_by_id(self, todo_id, text="", completed=False):
        oid = parse_todo_id(todo_id)
        self._check()
        if oid not in self.docs:
            raise TodoNotFound(todo_id)
        self.docs[oid].update(text=text, completed=completed)
        return serialize_todo(self.docs[oid])

    async def delete_by_id(self, todo_id):
        oid = parse_todo_id(todo_id)
        self._check()
        if self.docs.pop(oid, None) is None:
            raise TodoNotFound(todo_id)
        return 1

    def close(self):
        pass


@pytest.fixture()
def store():
    return InMemoryTodoStore()


@pytest.fixture()
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c
