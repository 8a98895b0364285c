import pytest
from bson import ObjectId

from helper import format_todo_id, parse_todo_id, serialize_todo
from todo_exceptions import InvalidTodoId, StoreError


def test_parse_todo_id_accepts_hex():
    oid = ObjectId()
    assert parse_todo_id(str(oid)) == oid


@pytest.mark.parametrize("value", ["", "abc", "g" * 24, "0" * 25, None])
def test_parse_todo_id_rejects_malformed(value):
    with pytest.raises(InvalidTodoId):
        parse_todo_id(value)


def test_format_todo_id():
    oid = ObjectId()
    assert format_todo_id(oid) == str(oid)
    assert format_todo_id(None) is None


def test_serialize_todo_renames_id():
    oid = ObjectId()
    assert serialize_todo({"_id": oid, "text": "x", "completed": True}) == {
        "id": str(oid),
        "text": "x",
        "completed": True,
    }


def test_serialize_todo_omits_missing_id_and_defaults_fields():
    assert serialize_todo({}) == {"text": "", "completed": False}
    assert serialize_todo(None) is None


@pytest.mark.parametrize("doc", [{"text": 1}, {"completed": "yes"}, {"completed": 0}])
def test_serialize_todo_rejects_wrong_types(doc):
    with pytest.raises(StoreError):
        serialize_todo(doc)
