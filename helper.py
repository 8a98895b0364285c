from typing import Optional
from bson import ObjectId
from bson.errors import InvalidId

from todo_exceptions import InvalidTodoId, StoreError


def parse_todo_id(value: str) -> ObjectId:
    """Turn a client-supplied id into an ObjectId, raising InvalidTodoId if malformed"""
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        raise InvalidTodoId(f"Invalid todo id: {value!r}")
    try:
        return ObjectId(value)
    except InvalidId:
        raise InvalidTodoId(f"Invalid todo id: {value!r}")


def format_todo_id(todo_id: Optional[ObjectId]) -> Optional[str]:
    if todo_id is None:
        return None
    return str(todo_id)


# Helper function to serialize MongoDB documents
def serialize_todo(todo: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to the JSON record shape.

    Missing fields fall back to their zero values; fields of the wrong type
    mean the document cannot be decoded and raise StoreError.
    """
    if todo is None:
        return None

    text = todo.get("text", "")
    completed = todo.get("completed", False)
    if not isinstance(text, str):
        raise StoreError(f"cannot decode field 'text' of type {type(text).__name__}")
    if not isinstance(completed, bool):
        raise StoreError(f"cannot decode field 'completed' of type {type(completed).__name__}")

    serialized = {}
    todo_id = format_todo_id(todo.get("_id"))
    if todo_id:
        serialized["id"] = todo_id
    serialized["text"] = text
    serialized["completed"] = completed
    return serialized
