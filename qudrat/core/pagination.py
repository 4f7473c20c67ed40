import math

from fastapi import Query


class Pagination:
    def __init__(self, page: int = 1, limit: int = 10):
        self.page = page
        self.limit = limit

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def build(self, total: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "totalPages": math.ceil(total / self.limit),
        }


def pagination_params(default_limit: int):
    """Build a `page`/`limit` query dependency with a per-resource default limit"""

    def dependency(
        page: int = Query(1, ge=1),
        limit: int = Query(default_limit, ge=1),
    ) -> Pagination:
        return Pagination(page, limit)

    return dependency
