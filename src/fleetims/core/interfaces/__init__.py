"""Core interfaces (Protocol classes) for fleetims."""

from fleetims.core.interfaces.entity_client import IEntityClient
from fleetims.core.interfaces.notifier import IToastNotifier
from fleetims.core.interfaces.query_store import IQueryStore
from fleetims.core.interfaces.translator import ITranslator

__all__ = [
    "IQueryStore",
    "IToastNotifier",
    "ITranslator",
    "IEntityClient",
]
