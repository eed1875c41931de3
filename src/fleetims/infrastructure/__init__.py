"""Infrastructure layer implementations for fleetims."""

from fleetims.infrastructure.notifiers import (
    InMemoryToastNotifier,
    LoggingToastNotifier,
)
from fleetims.infrastructure.stores import InMemoryQueryStore
from fleetims.infrastructure.translations import TranslationCatalog

__all__ = [
    "InMemoryQueryStore",
    "InMemoryToastNotifier",
    "LoggingToastNotifier",
    "TranslationCatalog",
]
