"""
Reference population for stored documents.

Documents keep references as ObjectIds (or lists of them). `populate`
swaps those ids for the referenced documents, one `$in` query per path:

    await populate(db, courses, "lessons", "lessons")
    await populate(db, ai_courses, "tree.lessons", "ailessons")
    await populate(db, payments, "userId", "users", fields="name email")

A single reference whose target is gone becomes None; dangling ids inside a
reference list are dropped.
"""

from typing import Iterator, List, Optional, Tuple, Union

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase


def _targets(nodes: list, parts: List[str]) -> Iterator[Tuple[dict, str]]:
    """Yield (container, key) pairs addressed by a dotted path"""
    for node in nodes:
        if not isinstance(node, dict):
            continue
        if len(parts) == 1:
            if parts[0] in node:
                yield node, parts[0]
            continue
        child = node.get(parts[0])
        children = child if isinstance(child, list) else [child]
        yield from _targets(children, parts[1:])


async def populate(
    db: AsyncIOMotorDatabase,
    docs: Union[dict, List[dict], None],
    path: str,
    collection: str,
    fields: Optional[str] = None,
):
    if not docs:
        return docs
    nodes = docs if isinstance(docs, list) else [docs]
    parts = path.split(".")

    ids = set()
    for holder, key in _targets(nodes, parts):
        value = holder[key]
        if isinstance(value, list):
            ids.update(v for v in value if isinstance(v, ObjectId))
        elif isinstance(value, ObjectId):
            ids.add(value)
    if not ids:
        return docs

    projection = {name: 1 for name in fields.split()} if fields else None
    cursor = db[collection].find({"_id": {"$in": list(ids)}}, projection)
    by_id = {d["_id"]: d for d in await cursor.to_list(length=None)}

    for holder, key in _targets(nodes, parts):
        value = holder[key]
        if isinstance(value, list):
            holder[key] = [by_id[v] if isinstance(v, ObjectId) else v for v in value
                           if not isinstance(v, ObjectId) or v in by_id]
        elif isinstance(value, ObjectId):
            holder[key] = by_id.get(value)
    return docs
