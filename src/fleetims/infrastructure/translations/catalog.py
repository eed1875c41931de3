"""Namespaced translation catalog."""

import logging
from collections.abc import Mapping
from typing import Any

from fleetims.infrastructure.translations.locales import LOCALES

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "es-MX"


class TranslationCatalog:
    """Looks up dotted keys in per-namespace message trees.

    A missing key resolves to ``"<namespace>.<key>"`` so that gaps in a
    catalog show up on screen instead of failing the operation.
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        messages: Mapping[str, Mapping[str, Any]] | None = None,
        fallback_locale: str | None = "en-US",
    ) -> None:
        """Initialize the catalog.

        Args:
            locale: Locale code used to pick bundled messages.
            messages: Explicit namespace trees, replacing the bundled ones.
            fallback_locale: Locale consulted when a key is missing.

        Raises:
            ValueError: If neither messages nor a bundled locale is available.
        """
        if messages is None:
            if locale not in LOCALES:
                raise ValueError(
                    f"Unknown locale {locale!r}; available: {sorted(LOCALES)}"
                )
            messages = LOCALES[locale]
        self._locale = locale
        self._messages = messages
        self._fallback = (
            LOCALES.get(fallback_locale)
            if fallback_locale and fallback_locale != locale
            else None
        )

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def namespaces(self) -> list[str]:
        return sorted(self._messages)

    def translate(self, namespace: str, key: str, **params: Any) -> str:
        """Resolve a dotted key inside a namespace.

        Args:
            namespace: Message namespace.
            key: Dotted key such as ``messages.create.success``.
            **params: Values for ``{name}`` placeholders.

        Returns:
            The localized message, or ``"<namespace>.<key>"`` when missing.
        """
        message = _lookup(self._messages, namespace, key)
        if message is None and self._fallback is not None:
            message = _lookup(self._fallback, namespace, key)
        if message is None:
            logger.debug("Missing translation %s.%s (%s)", namespace, key, self._locale)
            return f"{namespace}.{key}"
        if params:
            return message.format_map(_SafeParams(params))
        return message

    def has(self, namespace: str, key: str) -> bool:
        return _lookup(self._messages, namespace, key) is not None


def _lookup(
    messages: Mapping[str, Mapping[str, Any]],
    namespace: str,
    key: str,
) -> str | None:
    node: Any = messages.get(namespace)
    for part in key.split("."):
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
    return node if isinstance(node, str) else None


class _SafeParams(dict):
    """Leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"
