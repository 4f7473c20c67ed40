import pytest
from bson import ObjectId
from pydantic import ValidationError

from qudrat.core.crud import build_update
from qudrat.core.media import clean_media, is_base64_image, is_valid_question
from qudrat.core.pagination import Pagination
from qudrat.core.populate import populate
from qudrat.core.serialization import CamelModel, ObjectIdField, ObjectIdList, serialize_mongo


class Ref(CamelModel):
    owner_id: ObjectIdField = None
    item_ids: ObjectIdList = []


def test_object_id_coercion():
    oid = ObjectId()

    assert Ref(ownerId=str(oid)).owner_id == oid
    assert Ref(ownerId="").owner_id is None
    assert Ref(ownerId={"_id": str(oid), "name": "populated"}).owner_id == oid
    assert Ref(itemIds=[str(oid), "", None]).item_ids == [oid]
    with pytest.raises(ValidationError):
        Ref(ownerId="xyz")


def test_serialize_mongo_nested():
    oid = ObjectId()

    assert serialize_mongo({"_id": oid, "tree": [{"lessons": [oid]}]}) == {
        "_id": str(oid),
        "tree": [{"lessons": [str(oid)]}],
    }


def test_build_update_unsets_none():
    update = build_update({"title": "t", "photo": None}, touch=False)

    assert update == {"$set": {"title": "t"}, "$unset": {"photo": ""}}


def test_pagination_total_pages():
    assert Pagination(page=2, limit=10).skip == 10
    assert Pagination(limit=10).build(0)["totalPages"] == 0
    assert Pagination(limit=10).build(21)["totalPages"] == 3


def test_media_checks():
    assert is_base64_image("data:image/webp;base64,AAAA")
    assert not is_base64_image("data:audio/mp3;base64,AAAA")
    assert clean_media(["http://a/b.mp3", "data:audio/wav;base64,AA", "file:///x", 3]) == [
        "http://a/b.mp3",
        "data:audio/wav;base64,AA",
    ]
    assert not is_valid_question({"question": "q", "options": ["a", "b"], "correctAnswer": True})


async def test_populate_nested_paths_and_dangling_refs(db):
    kept = (await db.ailessons.insert_one({"title": "kept"})).inserted_id
    gone = ObjectId()
    course = {"tree": [{"lessons": [kept, gone]}], "certificateId": gone}

    await populate(db, course, "tree.lessons", "ailessons")
    await populate(db, course, "certificateId", "certificates")

    assert [lesson["title"] for lesson in course["tree"][0]["lessons"]] == ["kept"]
    assert course["certificateId"] is None


async def test_populate_projection(db):
    user_id = (await db.users.insert_one({"name": "N", "email": "e", "streak": 3})).inserted_id
    payments = [{"userId": user_id}]

    await populate(db, payments, "userId", "users", fields="name email")

    assert payments[0]["userId"] == {"_id": user_id, "name": "N", "email": "e"}
