from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from businesses import repository as business_repository
from main import app
from photos import repository as photo_repository
from reviews import repository as review_repository


class InMemoryStore:
    """
    Dict-backed stand-in for the repository modules.

    Mirrors the SQL each repository function runs, closely enough for the
    HTTP layer: serial ids, ordering by id, cascade from businesses.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[int, dict[str, Any]]] = {
            "businesses": {},
            "reviews": {},
            "photos": {},
        }
        self._next_id = {name: 1 for name in self.tables}

    def _insert(self, table: str, values: dict[str, Any]) -> int:
        row_id = self._next_id[table]
        self._next_id[table] += 1
        self.tables[table][row_id] = {"id": row_id, **values}
        return row_id

    def _ordered(self, table: str) -> list[dict[str, Any]]:
        return [dict(row) for _, row in sorted(self.tables[table].items())]

    def _where(self, table: str, **match: Any) -> list[dict[str, Any]]:
        return [row for row in self._ordered(table) if all(row.get(k) == v for k, v in match.items())]

    # businesses

    async def count_businesses(self) -> int:
        return len(self.tables["businesses"])

    async def list_businesses(self, *, limit: int, offset: int) -> list[dict[str, Any]]:
        return self._ordered("businesses")[offset : offset + limit]

    async def insert_business(self, values: dict[str, Any]) -> int:
        row = {"website": None, "email": None, **values}
        return self._insert("businesses", row)

    async def get_business(self, business_id: int) -> dict[str, Any] | None:
        row = self.tables["businesses"].get(business_id)
        return dict(row) if row is not None else None

    async def update_business(self, business_id: int, values: dict[str, Any]) -> bool:
        if business_id not in self.tables["businesses"]:
            return False
        self.tables["businesses"][business_id].update(values)
        return True

    async def delete_business(self, business_id: int) -> bool:
        if self.tables["businesses"].pop(business_id, None) is None:
            return False
        for table in ("reviews", "photos"):
            self.tables[table] = {
                k: row for k, row in self.tables[table].items() if row["businessid"] != business_id
            }
        return True

    async def list_businesses_by_owner(self, owner_id: int) -> list[dict[str, Any]]:
        return self._where("businesses", ownerid=owner_id)

    # reviews

    async def count_reviews(self) -> int:
        return len(self.tables["reviews"])

    async def list_reviews(self, *, limit: int, offset: int) -> list[dict[str, Any]]:
        return self._ordered("reviews")[offset : offset + limit]

    async def count_reviews_for_pair(self, *, user_id: int, business_id: int) -> int:
        return len(self._where("reviews", userid=user_id, businessid=business_id))

    async def insert_review(self, values: dict[str, Any]) -> int:
        return self._insert("reviews", {"review": None, **values})

    async def get_review(self, review_id: int) -> dict[str, Any] | None:
        row = self.tables["reviews"].get(review_id)
        return dict(row) if row is not None else None

    async def update_review(self, review_id: int, values: dict[str, Any]) -> bool:
        row = self.tables["reviews"].get(review_id)
        if row is None or row["userid"] != values["userid"] or row["businessid"] != values["businessid"]:
            return False
        row.update({k: v for k, v in values.items() if k in ("dollars", "stars", "review")})
        return True

    async def delete_review(self, review_id: int) -> bool:
        return self.tables["reviews"].pop(review_id, None) is not None

    async def list_reviews_for_business(self, business_id: int) -> list[dict[str, Any]]:
        return self._where("reviews", businessid=business_id)

    async def list_reviews_for_user(self, user_id: int) -> list[dict[str, Any]]:
        return self._where("reviews", userid=user_id)

    # photos

    async def count_photos(self) -> int:
        return len(self.tables["photos"])

    async def list_photos(self, *, limit: int, offset: int) -> list[dict[str, Any]]:
        return self._ordered("photos")[offset : offset + limit]

    async def insert_photo(self, values: dict[str, Any]) -> int:
        return self._insert("photos", {"caption": None, **values})

    async def get_photo(self, photo_id: int) -> dict[str, Any] | None:
        row = self.tables["photos"].get(photo_id)
        return dict(row) if row is not None else None

    async def update_photo(self, photo_id: int, values: dict[str, Any]) -> bool:
        if photo_id not in self.tables["photos"]:
            return False
        self.tables["photos"][photo_id].update(values)
        return True

    async def delete_photo(self, photo_id: int) -> bool:
        return self.tables["photos"].pop(photo_id, None) is not None

    async def list_photos_for_business(self, business_id: int) -> list[dict[str, Any]]:
        return self._where("photos", businessid=business_id)

    async def list_photos_for_user(self, user_id: int) -> list[dict[str, Any]]:
        return self._where("photos", userid=user_id)


_PATCHED = {
    business_repository: (
        "count_businesses",
        "list_businesses",
        "insert_business",
        "get_business",
        "update_business",
        "delete_business",
        "list_businesses_by_owner",
    ),
    review_repository: (
        "count_reviews",
        "list_reviews",
        "count_reviews_for_pair",
        "insert_review",
        "get_review",
        "update_review",
        "delete_review",
        "list_reviews_for_business",
        "list_reviews_for_user",
    ),
    photo_repository: (
        "count_photos",
        "list_photos",
        "insert_photo",
        "get_photo",
        "update_photo",
        "delete_photo",
        "list_photos_for_business",
        "list_photos_for_user",
    ),
}


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryStore:
    fake = InMemoryStore()
    for module, names in _PATCHED.items():
        for name in names:
            monkeypatch.setattr(module, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(store: InMemoryStore) -> TestClient:
    # No context manager: the lifespan (pool + bootstrap) is not started.
    return TestClient(app)


@pytest.fixture
def business_body() -> dict[str, Any]:
    return {
        "ownerid": 7,
        "name": "Block 15",
        "address": "300 SW Jefferson Ave.",
        "city": "Corvallis",
        "state": "OR",
        "zip": "97333",
        "phone": "541-758-2077",
        "category": "Restaurant",
        "subcategory": "Brewpub",
        "website": "http://block15.com",
    }
