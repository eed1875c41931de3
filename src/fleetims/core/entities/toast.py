"""Toast notification entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fleetims.core.interfaces.translator import ITranslator


class ToastLevel(str, Enum):
    """Visual level of a toast."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    """A transient notification reporting an operation outcome."""

    id: str
    level: ToastLevel
    message: str
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ToastMessages:
    """The three messages shown over the life of one mutation."""

    loading: str
    success: str
    error: str

    @classmethod
    def for_action(
        cls,
        translator: "ITranslator",
        namespace: str,
        action: str,
    ) -> "ToastMessages":
        """Resolve ``messages.<action>.*`` in a translation namespace.

        Args:
            translator: Translation lookup.
            namespace: Entity namespace, e.g. ``busModels``.
            action: ``create``, ``update`` or ``delete``.

        Returns:
            The localized messages.
        """
        return cls(
            loading=translator.translate(namespace, f"messages.{action}.loading"),
            success=translator.translate(namespace, f"messages.{action}.success"),
            error=translator.translate(namespace, f"messages.{action}.error"),
        )
