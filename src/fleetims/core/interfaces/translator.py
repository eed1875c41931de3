"""Translator interface."""

from typing import Any, Protocol


class ITranslator(Protocol):
    """Contract for namespaced message lookup."""

    def translate(self, namespace: str, key: str, **params: Any) -> str:
        """Resolve a dotted key inside a namespace.

        Args:
            namespace: Message namespace, usually the entity collection name.
            key: Dotted key such as ``messages.create.success``.
            **params: Values interpolated into ``{name}`` placeholders.

        Returns:
            The localized message.
        """
        ...
