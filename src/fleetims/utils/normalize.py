"""Normalization utilities for query key segments and slugs."""

import json
import re
import unicodedata
from collections.abc import Hashable
from enum import Enum
from typing import Any

from pydantic import BaseModel


def canonical_json(value: Any) -> str:
    """Serialize a value to JSON deterministically.

    Args:
        value: Any JSON-serializable value.

    Returns:
        Compact JSON with sorted keys.
    """
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


def normalize_segment(value: Any) -> Hashable:
    """Turn a key segment into a hashable, order-insensitive form.

    Scalars are kept as they are so that prefixes such as ``("buses", 3)``
    stay readable. Mappings, sequences and models become canonical JSON,
    so two filter dicts with the same content produce the same segment.

    Args:
        value: A raw key segment.

    Returns:
        The normalized segment.
    """
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, BaseModel):
        return canonical_json(value.model_dump(mode="json", exclude_none=True))
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        if isinstance(value, (set, frozenset)):
            value = sorted(value, key=str)
        return canonical_json(value)
    return str(value)


def slugify(text: str) -> str:
    """Build a URL slug from free text.

    Accents are stripped, runs of non-alphanumerics collapse to a single
    hyphen, and the result is lowercase.

    Args:
        text: The text to slugify, e.g. a terminal name.

    Returns:
        The slug, e.g. ``"central-del-norte"``.
    """
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    )
    return re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")
