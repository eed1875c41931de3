"""In-memory toast notifier implementation."""

import itertools

from fleetims.core.entities.toast import Toast, ToastLevel


class InMemoryToastNotifier:
    """Notifier that keeps the visible toasts in memory.

    A toast shown with the id of an earlier one replaces it, the way a
    loading toast turns into a success or error toast. ``history`` keeps
    every toast ever shown, in order.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._active: dict[str, Toast] = {}
        self.history: list[Toast] = []

    @property
    def toasts(self) -> list[Toast]:
        """Currently visible toasts, oldest first."""
        return list(self._active.values())

    def loading(self, message: str) -> str:
        return self._show(ToastLevel.LOADING, message)

    def success(self, message: str, toast_id: str | None = None) -> str:
        return self._show(ToastLevel.SUCCESS, message, toast_id=toast_id)

    def error(
        self,
        message: str,
        toast_id: str | None = None,
        description: str | None = None,
    ) -> str:
        return self._show(
            ToastLevel.ERROR, message, toast_id=toast_id, description=description
        )

    def dismiss(self, toast_id: str) -> bool:
        return self._active.pop(toast_id, None) is not None

    def levels(self) -> list[ToastLevel]:
        """Levels of every toast shown so far."""
        return [toast.level for toast in self.history]

    def _show(
        self,
        level: ToastLevel,
        message: str,
        toast_id: str | None = None,
        description: str | None = None,
    ) -> str:
        toast_id = toast_id or f"toast-{next(self._ids)}"
        toast = Toast(
            id=toast_id, level=level, message=message, description=description
        )
        self._active[toast_id] = toast
        self.history.append(toast)
        return toast_id
