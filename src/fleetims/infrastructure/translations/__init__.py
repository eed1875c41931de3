"""Translation catalogs for toast and view messages."""

from fleetims.infrastructure.translations.catalog import (
    DEFAULT_LOCALE,
    TranslationCatalog,
)

__all__ = ["DEFAULT_LOCALE", "TranslationCatalog"]
