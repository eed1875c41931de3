"""Tests for the SQLite repositories."""

from typing import Any

import pytest

from fleetims import (
    DuplicateError,
    ForeignKeyError,
    ListParams,
    NotFoundError,
    OrderBy,
    PaginationParams,
    ValidationError,
)
from fleetims.server import Database
from fleetims.server.repository import (
    BusModelRepository,
    BusRepository,
    PopulationRepository,
    UserRepository,
)
from fleetims.utils.hashing import verify_password


@pytest.fixture
def populations(database: Database) -> PopulationRepository:
    return PopulationRepository(database)


async def seed_populations(repository: PopulationRepository) -> list[dict[str, Any]]:
    return [
        await repository.create({"code": code, "name": name, "active": active})
        for code, name, active in [
            ("MTY", "Monterrey", True),
            ("GDL", "Guadalajara", True),
            ("CDMX", "Ciudad de México", False),
        ]
    ]


class TestBaseRepository:
    """Tests for BaseRepository behavior, exercised through populations."""

    @pytest.mark.asyncio
    async def test_create_and_find_one(self, populations: PopulationRepository) -> None:
        """Test inserting a record and reading it back."""
        created = await populations.create({"code": "MTY", "name": "Monterrey"})

        assert created["id"] > 0
        assert created["created_at"] is not None
        assert created["deleted_at"] is None
        assert await populations.find_one(created["id"]) == created

    @pytest.mark.asyncio
    async def test_find_one_missing(self, populations: PopulationRepository) -> None:
        """Test the not-found message."""
        with pytest.raises(NotFoundError, match="Population with id 99 not found"):
            await populations.find_one(99)

    @pytest.mark.asyncio
    async def test_update_partial(self, populations: PopulationRepository) -> None:
        """Test that only the given fields change."""
        created = await populations.create({"code": "MTY", "name": "Monterrey"})

        updated = await populations.update(created["id"], {"name": "Monterrey NL"})

        assert updated["name"] == "Monterrey NL"
        assert updated["code"] == "MTY"

    @pytest.mark.asyncio
    async def test_soft_delete_hides_record(
        self, populations: PopulationRepository
    ) -> None:
        """Test that deleted rows vanish from every read."""
        created = await populations.create({"code": "MTY", "name": "Monterrey"})

        deleted = await populations.delete(created["id"])

        assert deleted["deleted_at"] is not None
        with pytest.raises(NotFoundError):
            await populations.find_one(created["id"])
        assert await populations.find_all() == []
        with pytest.raises(NotFoundError):
            await populations.delete(created["id"])

    @pytest.mark.asyncio
    async def test_deleted_value_can_be_reused(
        self, populations: PopulationRepository
    ) -> None:
        """Test that a soft-deleted row releases its unique value."""
        created = await populations.create({"code": "MTY", "name": "Monterrey"})
        await populations.delete(created["id"])

        again = await populations.create({"code": "MTY", "name": "Monterrey"})
        assert again["id"] != created["id"]

    @pytest.mark.asyncio
    async def test_unique_violation_maps_to_duplicate(
        self, populations: PopulationRepository
    ) -> None:
        """Test that a UNIQUE failure raises DuplicateError."""
        await populations.create({"code": "MTY", "name": "Monterrey"})

        with pytest.raises(DuplicateError) as exc_info:
            await populations.create({"code": "MTY", "name": "Other"})
        assert exc_info.value.details["fields"] == ["code"]

    @pytest.mark.asyncio
    async def test_not_null_violation_maps_to_validation(
        self, populations: PopulationRepository
    ) -> None:
        """Test that a missing required column raises ValidationError."""
        with pytest.raises(ValidationError):
            await populations.create({"code": "MTY"})

    @pytest.mark.asyncio
    async def test_unknown_column_rejected(
        self, populations: PopulationRepository
    ) -> None:
        """Test that writes to unknown columns are refused."""
        with pytest.raises(ValidationError, match="colour"):
            await populations.create({"code": "MTY", "name": "x", "colour": "red"})

    @pytest.mark.asyncio
    async def test_find_all_filters_and_orders(
        self, populations: PopulationRepository
    ) -> None:
        """Test equality filters and explicit ordering."""
        await seed_populations(populations)

        records = await populations.find_all(
            ListParams(
                filters={"active": True},
                order_by=[OrderBy(field="name", direction="desc")],
            )
        )

        assert [r["code"] for r in records] == ["MTY", "GDL"]

    @pytest.mark.asyncio
    async def test_search_term(self, populations: PopulationRepository) -> None:
        """Test case-insensitive search over searchable fields."""
        await seed_populations(populations)

        records = await populations.find_all(ListParams(search_term="guada"))

        assert [r["code"] for r in records] == ["GDL"]

    @pytest.mark.asyncio
    async def test_unknown_order_field(self, populations: PopulationRepository) -> None:
        """Test that ordering by an unknown field is refused."""
        with pytest.raises(ValidationError):
            await populations.find_all(ListParams(order_by=[OrderBy(field="nope")]))

    @pytest.mark.asyncio
    async def test_unknown_filter_field(
        self, populations: PopulationRepository
    ) -> None:
        """Test that filtering by an unknown field is refused."""
        with pytest.raises(ValidationError):
            await populations.find_all(ListParams(filters={"nope": 1}))

    @pytest.mark.asyncio
    async def test_pagination(self, populations: PopulationRepository) -> None:
        """Test page slicing and metadata."""
        await seed_populations(populations)

        page = await populations.find_all_paginated(
            PaginationParams(page=2, page_size=2)
        )

        assert [r["code"] for r in page.data] == ["CDMX"]
        assert page.pagination.total_count == 3
        assert page.pagination.total_pages == 2
        assert page.pagination.has_previous_page
        assert not page.pagination.has_next_page

    @pytest.mark.asyncio
    async def test_check_uniqueness(self, populations: PopulationRepository) -> None:
        """Test conflict detection, excluding the record itself."""
        created = await populations.create({"code": "MTY", "name": "Monterrey"})

        assert await populations.check_uniqueness({"code": "MTY"}) == [
            {"field": "code", "value": "MTY"}
        ]
        assert (
            await populations.check_uniqueness({"code": "MTY"}, exclude_id=created["id"])
            == []
        )
        assert await populations.check_uniqueness({"code": None}) == []


class TestJsonAndRelations:
    """Tests for JSON columns and relations."""

    @pytest.mark.asyncio
    async def test_json_fields_round_trip(
        self, database: Database, bus_model_payload: dict[str, Any]
    ) -> None:
        """Test that list columns come back as lists."""
        repository = BusModelRepository(database)

        created = await repository.create(bus_model_payload)

        assert created["amenities"] == ["wifi", "restroom"]
        assert created["seats_per_floor"][0]["num_rows"] == 11

    @pytest.mark.asyncio
    async def test_validate_relation_exists(self, database: Database) -> None:
        """Test the relation check message."""
        repository = BusRepository(database)

        with pytest.raises(ForeignKeyError, match="Bus model with id 5 not found"):
            await repository.validate_relation_exists("bus_models", 5, "Bus model")

    @pytest.mark.asyncio
    async def test_foreign_key_violation(
        self, database: Database, bus_payload: Any
    ) -> None:
        """Test that SQLite foreign key failures map to ForeignKeyError."""
        repository = BusRepository(database)

        with pytest.raises(ForeignKeyError):
            await repository.create(bus_payload(model_id=42))


class TestUserRepository:
    """Tests for password handling."""

    @pytest.mark.asyncio
    async def test_password_is_hashed_and_hidden(self, database: Database) -> None:
        """Test that the plain password is never stored nor returned."""
        repository = UserRepository(database)

        user = await repository.create(
            {
                "username": "ana",
                "email": "ana@example.com",
                "password": "s3cret-pass",
                "first_name": "Ana",
                "last_name": "López",
            }
        )

        assert "password" not in user
        assert "password_hash" not in user
        stored = await repository.find_password_hash("ana")
        assert stored is not None and "s3cret-pass" not in stored
        assert verify_password("s3cret-pass", stored)
        assert not verify_password("wrong", stored)

    @pytest.mark.asyncio
    async def test_cannot_filter_by_hidden_field(self, database: Database) -> None:
        """Test that hidden columns are not queryable."""
        repository = UserRepository(database)

        with pytest.raises(ValidationError):
            await repository.find_all(ListParams(filters={"password_hash": "x"}))
