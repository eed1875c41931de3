"""Toast notifier interface."""

from typing import Protocol


class IToastNotifier(Protocol):
    """Contract for surfacing operation outcomes to the user.

    A mutation opens a loading toast and later replaces it, by id, with
    a success or error toast.
    """

    def loading(self, message: str) -> str:
        """Show a loading toast.

        Args:
            message: Localized text.

        Returns:
            The toast id used to replace it later.
        """
        ...

    def success(self, message: str, toast_id: str | None = None) -> str:
        """Show a success toast, replacing ``toast_id`` when given."""
        ...

    def error(
        self,
        message: str,
        toast_id: str | None = None,
        description: str | None = None,
    ) -> str:
        """Show an error toast, replacing ``toast_id`` when given."""
        ...
