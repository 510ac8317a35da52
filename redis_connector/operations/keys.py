"""
Key and Document Property Helpers

Resolves the store key, TTL and hash field of each batch item. Every key
leaving this module has had the configured prefix applied exactly once.
"""

from redis_connector.core.config.constants import (
    DYNAMIC_PROPERTY_FIELD,
    DYNAMIC_PROPERTY_KEY,
    DYNAMIC_PROPERTY_TTL,
    TTL_NO_EXPIRY,
)
from redis_connector.operations.models import ObjectData, ObjectIdData


def format_key(key: str | None, prefix: str | None) -> str | None:
    """
    Apply the key prefix to a logical key.

    Missing or empty keys are returned unchanged so that callers can report
    NO_KEY for them.

    >>> format_key("user:1", "app:")
    'app:user:1'
    >>> format_key("", "app:")
    ''
    """
    if not key:
        return key
    return f"{prefix or ''}{key}"


def resolve_object_id(item: ObjectIdData, prefix: str | None) -> str | None:
    """Prefixed store key for a Get/Delete item, None when the id is missing."""
    return format_key(item.object_id, prefix) or None


def resolve_upsert_key(item: ObjectData, prefix: str | None) -> str | None:
    """Prefixed store key taken from the item's `key` property, None when missing."""
    key = item.dynamic_properties.get(DYNAMIC_PROPERTY_KEY)
    if not key:
        return None
    return format_key(key, prefix)


def resolve_ttl(item: ObjectData) -> int:
    """
    TTL in seconds from the item's `ttl` property.

    Absent or unparseable values mean "no expiry" (-1).
    """
    raw = item.dynamic_properties.get(DYNAMIC_PROPERTY_TTL)
    if raw is None:
        return TTL_NO_EXPIRY
    try:
        return int(str(raw).strip())
    except ValueError:
        return TTL_NO_EXPIRY


def resolve_field(item: ObjectIdData) -> str | None:
    """Optional hash field selector, None when missing or empty."""
    return item.dynamic_properties.get(DYNAMIC_PROPERTY_FIELD) or None
