"""
Metadata Module

Object type descriptor loading and browse-time schema resolution.
"""

from .object_types import (
    ObjectDefinition,
    ObjectDefinitions,
    ObjectType,
    SchemaDescriptor,
    create_object_type,
)
from .registry import MetadataRegistry

__all__ = [
    "MetadataRegistry",
    "ObjectDefinition",
    "ObjectDefinitions",
    "ObjectType",
    "SchemaDescriptor",
    "create_object_type",
]
