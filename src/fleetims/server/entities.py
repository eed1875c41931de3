"""Domain entities: record data plus the rules for saving it."""

import logging
from datetime import date
from typing import Any, TypeVar

from pydantic import BaseModel

from fleetims.core.entities.entity import ensure_persisted_id, is_entity_persisted
from fleetims.errors import DuplicateError, InvalidStateTransitionError, ValidationError
from fleetims.inventory.models import (
    Bus,
    BusModel,
    Driver,
    DriverStatus,
    EntityRecord,
    Population,
    Route,
    Terminal,
    User,
)
from fleetims.server.repository import (
    BaseRepository,
    BusModelRepository,
    BusRepository,
    DriverRepository,
    PopulationRepository,
    RouteRepository,
    TerminalRepository,
    UserRepository,
)
from fleetims.utils.normalize import slugify

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="DomainEntity")

Data = dict[str, Any]


class DomainEntity:
    """Base domain entity.

    Wraps the data of one record and its repository. A freshly built
    entity is transient until ``save`` returns its persisted copy.
    Instances are never mutated; ``save`` and ``update`` return new ones.
    """

    repository_class: type[BaseRepository] = BaseRepository
    record_model: type[EntityRecord] = EntityRecord
    unique_fields: tuple[str, ...] = ()

    def __init__(self, repository: BaseRepository, data: Data) -> None:
        self._repository = repository
        self._data = dict(data)

    @classmethod
    def create(
        cls: type[E], repository: BaseRepository, payload: BaseModel | Data
    ) -> E:
        """Build a transient entity from a create payload."""
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        data = {key: value for key, value in payload.items() if key != "id"}
        return cls(repository, data)

    @classmethod
    async def find(cls: type[E], repository: BaseRepository, entity_id: int) -> E:
        """Load a persisted entity.

        Raises:
            NotFoundError: If no active record has this id.
        """
        return cls(repository, await repository.find_one(entity_id))

    @property
    def id(self) -> int | None:
        return self._data.get("id")

    @property
    def is_persisted(self) -> bool:
        return is_entity_persisted(self.id)

    @property
    def data(self) -> Data:
        return dict(self._data)

    @property
    def entity_name(self) -> str:
        return self._repository.entity_name

    async def save(self: E) -> E:
        """Validate and insert the entity.

        Saving an entity that is already persisted writes nothing.

        Returns:
            The persisted entity.
        """
        if self.is_persisted:
            return type(self)(self._repository, self._data)

        data = self.prepare_create(dict(self._data))
        await self.validate(data)
        record = await self._repository.create(data)
        logger.info("Created %s %s", self.entity_name, record["id"])
        return type(self)(self._repository, record)

    async def update(self: E, payload: BaseModel | Data) -> E:
        """Validate and apply a partial update.

        Args:
            payload: Only the fields that were set are written.

        Returns:
            The updated entity.

        Raises:
            NotPersistedError: If the entity was never saved.
        """
        entity_id = ensure_persisted_id(self.id, self.entity_name)
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json", exclude_unset=True)

        changes = self.prepare_update(dict(payload))
        await self.validate(changes)
        record = await self._repository.update(entity_id, changes)
        logger.info("Updated %s %s", self.entity_name, entity_id)
        return type(self)(self._repository, record)

    async def delete(self: E) -> E:
        """Soft-delete the entity and return it with ``deleted_at`` set."""
        entity_id = ensure_persisted_id(self.id, self.entity_name)
        record = await self._repository.delete(entity_id)
        logger.info("Deleted %s %s", self.entity_name, entity_id)
        return type(self)(self._repository, record)

    def to_record(self) -> EntityRecord:
        """Return the stored record.

        Raises:
            NotPersistedError: If the entity was never saved.
        """
        ensure_persisted_id(self.id, self.entity_name)
        return self.record_model.model_validate(self._data)

    def prepare_create(self, data: Data) -> Data:
        """Fill derived fields of a new record."""
        return data

    def prepare_update(self, changes: Data) -> Data:
        """Fill derived fields of a partial update."""
        return changes

    async def validate(self, data: Data) -> None:
        """Check the rules that need the database.

        Args:
            data: The full record on create, or the changed fields on
                update.

        Raises:
            DuplicateError: If a unique field is already taken.
        """
        unique = {field: data[field] for field in self.unique_fields if field in data}
        if not unique:
            return
        conflicts = await self._repository.check_uniqueness(
            unique, exclude_id=self.id if self.is_persisted else None
        )
        if conflicts:
            taken = ", ".join(f"{c['field']} {c['value']!r}" for c in conflicts)
            raise DuplicateError(
                f"{self.entity_name} with {taken} already exists",
                details={"conflicts": conflicts},
            )

    def merged(self, changes: Data) -> Data:
        """Return the current data with the changes applied."""
        return {**self._data, **changes}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class BusModelEntity(DomainEntity):
    repository_class = BusModelRepository
    record_model = BusModel

    async def validate(self, data: Data) -> None:
        await super().validate(data)
        merged = self.merged(data)
        layout = merged.get("seats_per_floor") or []
        if len(layout) > (merged.get("num_floors") or 1):
            raise ValidationError(
                "Seat layout describes more floors than the model has",
                details={"field": "seats_per_floor"},
            )


class BusEntity(DomainEntity):
    """A bus; its model must exist."""

    repository_class = BusRepository
    record_model = Bus
    unique_fields = ("economic_number",)

    async def validate(self, data: Data) -> None:
        await super().validate(data)
        if data.get("model_id") is not None:
            await self._repository.validate_relation_exists(
                "bus_models", data["model_id"], "Bus model"
            )


# Statuses a new driver may start in.
ALLOWED_INITIAL_STATUSES: tuple[DriverStatus, ...] = (
    DriverStatus.IN_TRAINING,
    DriverStatus.ACTIVE,
    DriverStatus.PROBATION,
)

DRIVER_STATUS_TRANSITIONS: dict[DriverStatus, tuple[DriverStatus, ...]] = {
    DriverStatus.ACTIVE: (
        DriverStatus.INACTIVE,
        DriverStatus.SUSPENDED,
        DriverStatus.ON_LEAVE,
        DriverStatus.TERMINATED,
    ),
    DriverStatus.INACTIVE: (DriverStatus.ACTIVE, DriverStatus.TERMINATED),
    DriverStatus.SUSPENDED: (DriverStatus.ACTIVE, DriverStatus.TERMINATED),
    DriverStatus.ON_LEAVE: (DriverStatus.ACTIVE, DriverStatus.TERMINATED),
    DriverStatus.PROBATION: (DriverStatus.ACTIVE, DriverStatus.TERMINATED),
    DriverStatus.IN_TRAINING: (
        DriverStatus.ACTIVE,
        DriverStatus.PROBATION,
        DriverStatus.TERMINATED,
    ),
    DriverStatus.TERMINATED: (),
}


def valid_next_statuses(status: DriverStatus | str) -> list[DriverStatus]:
    return list(DRIVER_STATUS_TRANSITIONS[DriverStatus(status)])


def is_valid_status_transition(
    current: DriverStatus | str, new: DriverStatus | str
) -> bool:
    """Check a driver status change. Keeping the same status is always valid."""
    current, new = DriverStatus(current), DriverStatus(new)
    return current == new or new in DRIVER_STATUS_TRANSITIONS[current]


class DriverEntity(DomainEntity):
    """A driver with a status lifecycle.

    New drivers start in one of ``ALLOWED_INITIAL_STATUSES``. Later
    changes must follow ``DRIVER_STATUS_TRANSITIONS``; ``terminated`` is
    final. ``status_date`` follows every status change unless given.
    """

    repository_class = DriverRepository
    record_model = Driver
    unique_fields = ("driver_key", "payroll_key")

    @property
    def status(self) -> DriverStatus | None:
        status = self._data.get("status")
        return DriverStatus(status) if status is not None else None

    def valid_next_statuses(self) -> list[DriverStatus]:
        if self.status is None:
            return list(ALLOWED_INITIAL_STATUSES)
        return valid_next_statuses(self.status)

    def prepare_create(self, data: Data) -> Data:
        status = DriverStatus(data.get("status") or DriverStatus.IN_TRAINING)
        if status not in ALLOWED_INITIAL_STATUSES:
            raise ValidationError(
                f"A new driver cannot start as {status.value}",
                details={
                    "field": "status",
                    "value": status.value,
                    "allowed": [s.value for s in ALLOWED_INITIAL_STATUSES],
                },
            )
        data["status"] = status.value
        if not data.get("status_date"):
            data["status_date"] = date.today().isoformat()
        return data

    def prepare_update(self, changes: Data) -> Data:
        new_status = changes.get("status")
        if new_status is None or self.status is None:
            return changes

        if not is_valid_status_transition(self.status, new_status):
            allowed = [s.value for s in self.valid_next_statuses()]
            raise InvalidStateTransitionError(
                f"Driver cannot change status from {self.status.value} "
                f"to {DriverStatus(new_status).value}",
                details={
                    "field": "status",
                    "from": self.status.value,
                    "to": DriverStatus(new_status).value,
                    "allowed": allowed,
                },
            )
        if DriverStatus(new_status) != self.status and not changes.get("status_date"):
            changes["status_date"] = date.today().isoformat()
        return changes


class TerminalEntity(DomainEntity):
    """A terminal; its slug is derived from the name when not given."""

    repository_class = TerminalRepository
    record_model = Terminal
    unique_fields = ("code", "slug")

    def prepare_create(self, data: Data) -> Data:
        if not data.get("slug"):
            data["slug"] = slugify(data["name"])
        return data

    def prepare_update(self, changes: Data) -> Data:
        if "slug" in changes and not changes["slug"]:
            changes["slug"] = slugify(changes.get("name") or self._data["name"])
        return changes


class PopulationEntity(DomainEntity):
    repository_class = PopulationRepository
    record_model = Population
    unique_fields = ("code",)


class RouteEntity(DomainEntity):
    """A route between two different, existing terminals."""

    repository_class = RouteRepository
    record_model = Route

    async def validate(self, data: Data) -> None:
        await super().validate(data)
        merged = self.merged(data)
        origin = merged.get("origin_terminal_id")
        destination = merged.get("destination_terminal_id")

        if origin is not None and origin == destination:
            raise ValidationError(
                "Origin and destination terminals must be different",
                details={"field": "destination_terminal_id"},
            )
        for field, name in (
            ("origin_terminal_id", "Origin terminal"),
            ("destination_terminal_id", "Destination terminal"),
        ):
            if data.get(field) is not None:
                await self._repository.validate_relation_exists(
                    "terminals", data[field], name
                )


class UserEntity(DomainEntity):
    repository_class = UserRepository
    record_model = User
    unique_fields = ("username", "email")


ENTITY_CLASSES: dict[str, type[DomainEntity]] = {
    "busModels": BusModelEntity,
    "buses": BusEntity,
    "drivers": DriverEntity,
    "routes": RouteEntity,
    "terminals": TerminalEntity,
    "populations": PopulationEntity,
    "users": UserEntity,
}
