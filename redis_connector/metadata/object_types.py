"""
Object Type Metadata Types

Immutable value types describing the logical object types exposed to the
host platform and the schema attached to each (verb, role) combination.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar

from redis_connector.core.config.constants import (
    OBJECT_DEFINITION_KEY_FORMAT,
    SUPPORTED_OBJECT_TYPES,
    ContentType,
    ObjectDefinitionRole,
)
from redis_connector.core.exceptions import DefinitionNotFoundError, MetadataLoadError


def _value(item) -> str:
    return getattr(item, "value", item)


def definition_key(operation_type, custom_operation_type: str | None, role) -> str:
    """
    Lookup key of one object definition.

    >>> definition_key("UPSERT", None, ObjectDefinitionRole.INPUT)
    'upsert_input'
    """
    return OBJECT_DEFINITION_KEY_FORMAT.format(
        type=f"{_value(operation_type)}{custom_operation_type or ''}",
        mode=_value(role),
    ).lower()


@dataclass(frozen=True)
class SchemaDescriptor:
    """
    Structured XML schema text, or the BINARY sentinel for untyped payloads.

    Attributes:
        content_type: XML when a schema is attached, BINARY otherwise
        schema: Schema document text (None for BINARY)
    """

    content_type: ContentType
    schema: str | None = None

    BINARY: ClassVar["SchemaDescriptor"]

    @classmethod
    def structured(cls, schema: str) -> "SchemaDescriptor":
        return cls(ContentType.XML, schema)

    @property
    def is_binary(self) -> bool:
        return self.content_type == ContentType.BINARY


SchemaDescriptor.BINARY = SchemaDescriptor(ContentType.BINARY)


@dataclass(frozen=True)
class ObjectDefinition:
    """One side (input or output) of an operation's contract."""

    role: ObjectDefinitionRole
    descriptor: SchemaDescriptor

    @property
    def input_type(self) -> ContentType | None:
        return self.descriptor.content_type if self.role == ObjectDefinitionRole.INPUT else None

    @property
    def output_type(self) -> ContentType | None:
        return self.descriptor.content_type if self.role == ObjectDefinitionRole.OUTPUT else None

    @property
    def schema(self) -> str | None:
        return self.descriptor.schema

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "input_type": self.input_type.value if self.input_type else None,
            "output_type": self.output_type.value if self.output_type else None,
            "schema": self.schema,
        }


@dataclass(frozen=True)
class ObjectDefinitions:
    """Ordered definitions returned for one browse request."""

    definitions: tuple[ObjectDefinition, ...] = ()

    def __iter__(self):
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)


@dataclass(frozen=True)
class ObjectType:
    """
    A logical data shape (String or HashSet) and its per-operation definitions.

    The definition mapping is read-only once the instance is built.
    """

    id: str
    label: str
    help_text: str
    definitions: Mapping[str, SchemaDescriptor] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "definitions", MappingProxyType(dict(self.definitions)))

    def get_descriptor(
        self, operation_type, custom_operation_type: str | None, role: ObjectDefinitionRole
    ) -> SchemaDescriptor:
        """
        Raises:
            DefinitionNotFoundError: If the verb/role was not declared for this type
        """
        descriptor = self.definitions.get(definition_key(operation_type, custom_operation_type, role))
        if descriptor is None:
            raise DefinitionNotFoundError(
                self.id,
                operation_type=_value(operation_type),
                role=_value(role),
                custom_operation_type=custom_operation_type,
            )
        return descriptor

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "help_text": self.help_text}


def create_object_type(
    object_type_id: str,
    label: str,
    help_text: str,
    definitions: Mapping[str, SchemaDescriptor],
) -> ObjectType:
    """
    Build an ObjectType for one of the supported ids.

    Raises:
        MetadataLoadError: If the id is neither String nor HashSet
    """
    if object_type_id not in SUPPORTED_OBJECT_TYPES:
        raise MetadataLoadError(
            f"Object type {object_type_id} is not supported",
            details={"object_type_id": object_type_id},
        )
    return ObjectType(object_type_id, label, help_text, definitions)
