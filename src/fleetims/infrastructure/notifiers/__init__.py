"""Toast notifier implementations."""

from fleetims.infrastructure.notifiers.logging_notifier import LoggingToastNotifier
from fleetims.infrastructure.notifiers.memory import InMemoryToastNotifier

__all__ = ["InMemoryToastNotifier", "LoggingToastNotifier"]
