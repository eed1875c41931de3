"""Registry of the inventory resources.

The remote client, the generated hooks and the backend routers are all
built by iterating over ``RESOURCES``.
"""

from dataclasses import dataclass

from pydantic import BaseModel

from fleetims.inventory import models


@dataclass(frozen=True)
class Resource:
    """Naming and models of one inventory collection.

    Attributes:
        key: Cache key prefix and translation namespace (``busModels``).
        attribute: Attribute name on clients and hook bundles (``bus_models``).
        path: HTTP path segment (``bus-models``).
        entity_name: Human name used in error messages.
        record_model: Model of returned records.
        create_model: Payload model for create requests.
        update_model: Payload model for update requests.
    """

    key: str
    attribute: str
    path: str
    entity_name: str
    record_model: type[models.EntityRecord]
    create_model: type[BaseModel]
    update_model: type[BaseModel]


BUS_MODELS = Resource(
    key="busModels",
    attribute="bus_models",
    path="bus-models",
    entity_name="Bus model",
    record_model=models.BusModel,
    create_model=models.BusModelCreate,
    update_model=models.BusModelUpdate,
)

BUSES = Resource(
    key="buses",
    attribute="buses",
    path="buses",
    entity_name="Bus",
    record_model=models.Bus,
    create_model=models.BusCreate,
    update_model=models.BusUpdate,
)

DRIVERS = Resource(
    key="drivers",
    attribute="drivers",
    path="drivers",
    entity_name="Driver",
    record_model=models.Driver,
    create_model=models.DriverCreate,
    update_model=models.DriverUpdate,
)

ROUTES = Resource(
    key="routes",
    attribute="routes",
    path="routes",
    entity_name="Route",
    record_model=models.Route,
    create_model=models.RouteCreate,
    update_model=models.RouteUpdate,
)

TERMINALS = Resource(
    key="terminals",
    attribute="terminals",
    path="terminals",
    entity_name="Terminal",
    record_model=models.Terminal,
    create_model=models.TerminalCreate,
    update_model=models.TerminalUpdate,
)

POPULATIONS = Resource(
    key="populations",
    attribute="populations",
    path="populations",
    entity_name="Population",
    record_model=models.Population,
    create_model=models.PopulationCreate,
    update_model=models.PopulationUpdate,
)

USERS = Resource(
    key="users",
    attribute="users",
    path="users",
    entity_name="User",
    record_model=models.User,
    create_model=models.UserCreate,
    update_model=models.UserUpdate,
)

RESOURCES: tuple[Resource, ...] = (
    BUS_MODELS,
    BUSES,
    DRIVERS,
    ROUTES,
    TERMINALS,
    POPULATIONS,
    USERS,
)


def get_resource(name: str) -> Resource:
    """Look up a resource by key, attribute or path.

    Raises:
        KeyError: If no resource matches.
    """
    for resource in RESOURCES:
        if name in (resource.key, resource.attribute, resource.path):
            return resource
    raise KeyError(name)
