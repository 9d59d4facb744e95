"""
Tests for the startup schema bootstrap, with the db helpers faked out.
"""

import asyncio

import pytest

from core import bootstrap, db


class FakeCatalog:
    def __init__(self, constraints=(), tables=("businesses", "reviews", "photos")):
        self.constraints = set(constraints)
        self.tables = set(tables)
        self.statements = []

    async def execute(self, sql, *args):
        self.statements.append(" ".join(sql.split()))

    async def fetch_one(self, sql, *args):
        return {"ok": 1} if args[0] in self.constraints else None

    async def fetch_value(self, sql, *args):
        name = args[0].split(".", 1)[1]
        return name if name in self.tables else None


@pytest.fixture
def catalog(monkeypatch):
    fake = FakeCatalog()
    monkeypatch.setattr(db, "execute", fake.execute)
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_value", fake.fetch_value)
    return fake


def _alters(statements):
    return [s for s in statements if s.startswith("ALTER TABLE")]


def test_tables_created_in_dependency_order(catalog):
    asyncio.run(bootstrap.ensure_schema())

    creates = [s.split()[5] for s in catalog.statements if s.startswith("CREATE TABLE")]
    assert creates == ["businesses", "reviews", "photos"]
    first_alter = catalog.statements.index(_alters(catalog.statements)[0])
    last_index = max(i for i, s in enumerate(catalog.statements) if "INDEX" in s)
    assert last_index < first_alter


def test_foreign_keys_added_when_absent(catalog):
    report = asyncio.run(bootstrap.ensure_schema())

    assert report.created_constraints == ["fk_reviews_businessid", "fk_photos_businessid"]
    assert all("ON DELETE CASCADE" in s for s in _alters(catalog.statements))


def test_rerun_skips_existing_constraints(catalog):
    catalog.constraints = {"fk_reviews_businessid", "fk_photos_businessid"}

    report = asyncio.run(bootstrap.ensure_schema())

    assert report.created_constraints == []
    assert _alters(catalog.statements) == []
    assert all("IF NOT EXISTS" in s for s in catalog.statements)


def test_missing_users_table_is_reported(catalog, caplog):
    report = asyncio.run(bootstrap.ensure_schema())

    assert report.missing_tables == ["users"]
    assert "schema_missing_table table=users" in caplog.text


def test_users_table_present(catalog):
    catalog.tables.add("users")
    assert asyncio.run(bootstrap.ensure_schema()).missing_tables == []
