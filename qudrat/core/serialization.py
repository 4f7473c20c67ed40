from typing import Annotated, Any, List, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, WithJsonSchema
from pydantic.alias_generators import to_camel


def serialize_mongo(value: Any) -> Any:
    """Convert ObjectIds anywhere in a document to strings"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: serialize_mongo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_mongo(v) for v in value]
    return value


def serialize_many(docs: list[dict]) -> list[dict]:
    return [serialize_mongo(doc) for doc in docs]


def parse_object_id(value: Any) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def _coerce_object_id(value: Any) -> Any:
    # Populated documents posted back by the dashboard carry their id in _id
    if isinstance(value, dict) and "_id" in value:
        value = value["_id"]
    if value is None or value == "":
        return None
    oid = parse_object_id(value)
    if oid is None:
        raise ValueError(f"'{value}' is not a valid ObjectId")
    return oid


def _coerce_object_id_list(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return [v for v in value if v not in (None, "")]


_OBJECT_ID_SCHEMA = {"type": "string", "pattern": "^[0-9a-fA-F]{24}$"}

# "" and null mean "no reference"
ObjectIdField = Annotated[
    Optional[ObjectId],
    BeforeValidator(_coerce_object_id),
    WithJsonSchema(_OBJECT_ID_SCHEMA),
]

ObjectIdList = Annotated[
    List[ObjectIdField],
    BeforeValidator(_coerce_object_id_list),
    WithJsonSchema({"type": "array", "items": _OBJECT_ID_SCHEMA}),
]


class CamelModel(BaseModel):
    """Request body: snake_case attributes, camelCase on the wire and in MongoDB"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)
