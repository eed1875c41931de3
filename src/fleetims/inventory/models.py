"""Inventory records and request payloads.

Records are what the API returns. ``*Create`` payloads carry the required
fields for a new record and ``*Update`` payloads make every field
optional; only the fields actually sent are written.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EntityRecord(BaseModel):
    """Fields shared by every stored record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")


# Bus models


class FloorSeats(BaseModel):
    floor_number: int = Field(ge=1)
    num_rows: int = Field(ge=1)
    seats_left: int = Field(ge=0)
    seats_right: int = Field(ge=0)


class BusModel(EntityRecord):
    manufacturer: str
    model: str
    year: int
    seating_capacity: int
    num_floors: int = 1
    seats_per_floor: list[FloorSeats] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    engine_type: str | None = None
    distribution_type: str | None = None
    active: bool = True


class BusModelCreate(Payload):
    manufacturer: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int = Field(ge=1900, le=2100)
    seating_capacity: int = Field(gt=0)
    num_floors: int = Field(default=1, ge=1, le=2)
    seats_per_floor: list[FloorSeats] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    engine_type: str | None = None
    distribution_type: str | None = None
    active: bool = True


class BusModelUpdate(Payload):
    manufacturer: str | None = Field(default=None, min_length=1)
    model: str | None = Field(default=None, min_length=1)
    year: int | None = Field(default=None, ge=1900, le=2100)
    seating_capacity: int | None = Field(default=None, gt=0)
    num_floors: int | None = Field(default=None, ge=1, le=2)
    seats_per_floor: list[FloorSeats] | None = None
    amenities: list[str] | None = None
    engine_type: str | None = None
    distribution_type: str | None = None
    active: bool | None = None


# Buses


class BusStatus(str, Enum):
    ACTIVE = "ACTIVE"
    MAINTENANCE = "MAINTENANCE"
    REPAIR = "REPAIR"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"
    RESERVED = "RESERVED"
    IN_TRANSIT = "IN_TRANSIT"
    RETIRED = "RETIRED"


class BusLicensePlateType(str, Enum):
    NATIONAL = "NATIONAL"
    INTERNATIONAL = "INTERNATIONAL"


class Bus(EntityRecord):
    economic_number: str
    registration_number: str
    license_plate_type: BusLicensePlateType
    license_plate_number: str
    status: BusStatus
    model_id: int
    serial_number: str
    chassis_number: str
    gross_vehicle_weight: float
    purchase_date: date
    expiration_date: date
    current_kilometer: float | None = None
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None
    active: bool = True


class BusCreate(Payload):
    economic_number: str = Field(min_length=1)
    registration_number: str = Field(min_length=1)
    license_plate_type: BusLicensePlateType = BusLicensePlateType.NATIONAL
    license_plate_number: str = Field(min_length=1)
    status: BusStatus = BusStatus.ACTIVE
    model_id: int = Field(gt=0)
    serial_number: str = Field(min_length=1)
    chassis_number: str = Field(min_length=1)
    gross_vehicle_weight: float = Field(gt=0)
    purchase_date: date
    expiration_date: date
    current_kilometer: float | None = Field(default=None, ge=0)
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None
    active: bool = True


class BusUpdate(Payload):
    economic_number: str | None = Field(default=None, min_length=1)
    registration_number: str | None = Field(default=None, min_length=1)
    license_plate_type: BusLicensePlateType | None = None
    license_plate_number: str | None = Field(default=None, min_length=1)
    status: BusStatus | None = None
    model_id: int | None = Field(default=None, gt=0)
    serial_number: str | None = Field(default=None, min_length=1)
    chassis_number: str | None = Field(default=None, min_length=1)
    gross_vehicle_weight: float | None = Field(default=None, gt=0)
    purchase_date: date | None = None
    expiration_date: date | None = None
    current_kilometer: float | None = Field(default=None, ge=0)
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None
    active: bool | None = None


# Drivers


class DriverStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"
    IN_TRAINING = "in_training"
    PROBATION = "probation"


class Driver(EntityRecord):
    driver_key: str
    payroll_key: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    license: str
    license_expiry: date | None = None
    hire_date: date | None = None
    status: DriverStatus
    status_date: date | None = None
    bus_line_id: int | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None


class DriverCreate(Payload):
    driver_key: str = Field(min_length=1, pattern=r".*\S.*")
    payroll_key: str = Field(min_length=1, pattern=r".*\S.*")
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None
    license: str = Field(min_length=1)
    license_expiry: date | None = None
    hire_date: date | None = None
    status: DriverStatus = DriverStatus.IN_TRAINING
    status_date: date | None = None
    bus_line_id: int | None = Field(default=None, gt=0)
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None


class DriverUpdate(Payload):
    driver_key: str | None = Field(default=None, min_length=1, pattern=r".*\S.*")
    payroll_key: str | None = Field(default=None, min_length=1, pattern=r".*\S.*")
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    phone: str | None = None
    license: str | None = Field(default=None, min_length=1)
    license_expiry: date | None = None
    hire_date: date | None = None
    status: DriverStatus | None = None
    status_date: date | None = None
    bus_line_id: int | None = Field(default=None, gt=0)
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None


# Terminals


class Facility(BaseModel):
    name: str
    description: str | None = None
    icon: str | None = None


class Terminal(EntityRecord):
    name: str
    code: str
    slug: str
    address: str
    city_id: int | None = None
    latitude: float
    longitude: float
    contact_phone: str | None = None
    facilities: list[Facility] = Field(default_factory=list)
    operating_hours: dict[str, Any] | None = None
    active: bool = True


class TerminalCreate(Payload):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=10)
    slug: str | None = None
    address: str = Field(min_length=1)
    city_id: int | None = Field(default=None, gt=0)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    contact_phone: str | None = None
    facilities: list[Facility] = Field(default_factory=list)
    operating_hours: dict[str, Any] | None = None
    active: bool = True


class TerminalUpdate(Payload):
    name: str | None = Field(default=None, min_length=1)
    code: str | None = Field(default=None, min_length=1, max_length=10)
    slug: str | None = None
    address: str | None = Field(default=None, min_length=1)
    city_id: int | None = Field(default=None, gt=0)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    contact_phone: str | None = None
    facilities: list[Facility] | None = None
    operating_hours: dict[str, Any] | None = None
    active: bool | None = None


# Populations


class Population(EntityRecord):
    code: str
    name: str
    description: str | None = None
    active: bool = True


class PopulationCreate(Payload):
    code: str = Field(min_length=1, max_length=10)
    name: str = Field(min_length=1)
    description: str | None = None
    active: bool = True


class PopulationUpdate(Payload):
    code: str | None = Field(default=None, min_length=1, max_length=10)
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    active: bool | None = None


# Routes


class Route(EntityRecord):
    name: str
    description: str | None = None
    origin_terminal_id: int
    destination_terminal_id: int
    distance: float
    base_time: int
    is_compound: bool = False


class RouteCreate(Payload):
    name: str = Field(min_length=1)
    description: str | None = None
    origin_terminal_id: int = Field(gt=0)
    destination_terminal_id: int = Field(gt=0)
    distance: float = Field(gt=0)
    base_time: int = Field(gt=0)
    is_compound: bool = False


class RouteUpdate(Payload):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    origin_terminal_id: int | None = Field(default=None, gt=0)
    destination_terminal_id: int | None = Field(default=None, gt=0)
    distance: float | None = Field(default=None, gt=0)
    base_time: int | None = Field(default=None, gt=0)
    is_compound: bool | None = None


# Users


class User(EntityRecord):
    username: str
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    position: str | None = None
    employee_id: str | None = None
    department_id: int | None = None
    is_active: bool = True
    is_system_admin: bool = False
    last_login: datetime | None = None


class UserCreate(Payload):
    username: str = Field(min_length=3)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=8)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    phone: str | None = None
    position: str | None = None
    employee_id: str | None = None
    department_id: int | None = Field(default=None, gt=0)
    is_active: bool = True
    is_system_admin: bool = False


class UserUpdate(Payload):
    username: str | None = Field(default=None, min_length=3)
    email: str | None = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str | None = Field(default=None, min_length=8)
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    phone: str | None = None
    position: str | None = None
    employee_id: str | None = None
    department_id: int | None = Field(default=None, gt=0)
    is_active: bool | None = None
    is_system_admin: bool | None = None
