"""
Metadata Registry

Loads the declarative object type descriptor once and answers browse-time
lookups by object type id, operation verb and role.

Descriptor format (connector-metadata-objecttypes.xml):

    <ObjectTypes operationMetadataResourceFormat="{id}-{type}-{mode}.xsd">
        <ObjectType>
            <Id>HashSet</Id>
            <Label>Hash Set</Label>
            <HelpText>...</HelpText>
            <SupportedOperations>
                <Operation>
                    <Type>UPSERT</Type>
                    <CustomType>optional</CustomType>
                    <HasInput>true</HasInput>
                    <HasOutput>true</HasOutput>
                </Operation>
            </SupportedOperations>
        </ObjectType>
    </ObjectTypes>

For every declared operation both roles get a definition. A role is XML
when it is declared (HasInput/HasOutput) and its schema resource exists;
otherwise it is BINARY. A missing schema resource is never an error.

Architectural Decision: explicit registry owned by the connector
- Loaded lazily, exactly once per instance, behind a lock
- Immutable tuple of ObjectType after load
- Resources read through importlib.resources so packaged installs work

Author: System Architect
Date: 2025-12-10
"""

import threading
import xml.etree.ElementTree as ET
from importlib import resources

from redis_connector.core.config.constants import (
    METADATA_FORMAT_ATTRIBUTE,
    METADATA_RESOURCE_NAME,
    METADATA_RESOURCE_PACKAGE,
    ObjectDefinitionRole,
    Stage,
)
from redis_connector.core.exceptions import DefinitionNotFoundError, MetadataLoadError
from redis_connector.core.logging.logger import get_logger
from redis_connector.metadata.object_types import (
    ObjectDefinition,
    ObjectDefinitions,
    ObjectType,
    SchemaDescriptor,
    create_object_type,
    definition_key,
)

logger = get_logger(__name__)


def resource_name(template: str, object_type_id: str, operation_type: str, role: ObjectDefinitionRole) -> str:
    """
    Schema resource name for one object type / verb / role.

    >>> resource_name("{id}-{type}-{mode}.xsd", "HashSet", "UPSERT", ObjectDefinitionRole.INPUT)
    'hashset-upsert-input.xsd'
    """
    return (
        template.replace("{id}", object_type_id)
        .replace("{type}", operation_type)
        .replace("{mode}", role.value)
        .lower()
    )


def _parse_bool(text: str | None) -> bool:
    return (text or "").strip().lower() == "true"


class MetadataRegistry:
    """
    Object type metadata, loaded once from package resources.

    Args:
        resource_package: Package holding the descriptor and schema files
    """

    def __init__(self, resource_package: str = METADATA_RESOURCE_PACKAGE):
        self._resource_package = resource_package
        self._types: tuple[ObjectType, ...] | None = None
        self._lock = threading.Lock()
        self._load_count = 0

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> tuple[ObjectType, ...]:
        """
        Parse the descriptor on first call; later calls return the cached tuple.

        STAGE-META.1: Descriptor load

        Raises:
            MetadataLoadError: On any descriptor or schema parse failure
        """
        with self._lock:
            if self._types is None:
                self._types = self._load_descriptor()
                self._load_count += 1
                logger.info(
                    "Object type metadata loaded",
                    stage=Stage.METADATA_LOAD.value,
                    object_types=[t.id for t in self._types],
                )
            return self._types

    def _resource(self, name: str):
        return resources.files(self._resource_package).joinpath(name)

    def _load_descriptor(self) -> tuple[ObjectType, ...]:
        try:
            root = ET.fromstring(self._resource(METADATA_RESOURCE_NAME).read_bytes())
        except (ET.ParseError, OSError, ModuleNotFoundError) as e:
            raise MetadataLoadError.from_exception(
                e,
                message=f"Could not load {METADATA_RESOURCE_NAME}: {e}",
                resource_package=self._resource_package,
            )

        template = root.get(METADATA_FORMAT_ATTRIBUTE)
        if not template:
            raise MetadataLoadError(
                f"Descriptor is missing the {METADATA_FORMAT_ATTRIBUTE} attribute",
                details={"resource": METADATA_RESOURCE_NAME},
            )

        return tuple(self._build_object_type(element, template) for element in root.iter("ObjectType"))

    def _build_object_type(self, element: ET.Element, template: str) -> ObjectType:
        object_type_id = (element.findtext("Id") or "").strip()
        if not object_type_id:
            raise MetadataLoadError("Object type without Id in descriptor")

        definitions: dict[str, SchemaDescriptor] = {}
        for operation in element.iterfind("SupportedOperations/Operation"):
            operation_type = (operation.findtext("Type") or "").strip()
            if not operation_type:
                raise MetadataLoadError(
                    f"Operation without Type on object type {object_type_id}",
                    details={"object_type_id": object_type_id},
                )
            custom_type = (operation.findtext("CustomType") or "").strip() or None
            declared = {
                ObjectDefinitionRole.INPUT: _parse_bool(operation.findtext("HasInput")),
                ObjectDefinitionRole.OUTPUT: _parse_bool(operation.findtext("HasOutput")),
            }
            for role, has_role in declared.items():
                name = resource_name(template, object_type_id, operation_type, role)
                descriptor = self._load_schema(name) if has_role else None
                definitions[definition_key(operation_type, custom_type, role)] = (
                    descriptor or SchemaDescriptor.BINARY
                )

        return create_object_type(
            object_type_id,
            (element.findtext("Label") or "").strip(),
            (element.findtext("HelpText") or "").strip(),
            definitions,
        )

    def _load_schema(self, name: str) -> SchemaDescriptor | None:
        """Structured descriptor for a schema resource, None when it does not exist."""
        resource = self._resource(name)
        if not resource.is_file():
            return None

        data = resource.read_bytes()
        try:
            ET.fromstring(data)
        except ET.ParseError as e:
            raise MetadataLoadError.from_exception(e, message=f"Could not parse schema {name}: {e}", resource=name)
        return SchemaDescriptor.structured(data.decode("utf-8"))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def list_types(self) -> tuple[ObjectType, ...]:
        return self.load()

    def get_object_type(self, object_type_id: str) -> ObjectType:
        """
        Raises:
            DefinitionNotFoundError: If no object type has this id
        """
        for object_type in self.load():
            if object_type.id == object_type_id:
                return object_type
        raise DefinitionNotFoundError(
            object_type_id, message=f"Could not find an object type id:{object_type_id}"
        )

    def resolve(
        self,
        object_type_id: str,
        operation_type,
        custom_operation_type: str | None,
        role: ObjectDefinitionRole,
    ) -> SchemaDescriptor:
        """
        Schema descriptor for one object type / verb / role.

        STAGE-META.2: Definition resolution

        Raises:
            DefinitionNotFoundError: On a miss, carrying the requested identifiers
        """
        try:
            object_type = self.get_object_type(object_type_id)
        except DefinitionNotFoundError:
            raise DefinitionNotFoundError(
                object_type_id,
                operation_type=getattr(operation_type, "value", operation_type),
                role=role.value,
                custom_operation_type=custom_operation_type,
            )
        descriptor = object_type.get_descriptor(operation_type, custom_operation_type, role)
        logger.debug(
            "Object definition resolved",
            stage=Stage.METADATA_RESOLVE.value,
            object_type_id=object_type_id,
            role=role.value,
            content_type=descriptor.content_type.value,
        )
        return descriptor

    def to_object_definitions(
        self,
        object_type_id: str,
        operation_type,
        custom_operation_type: str | None,
        roles,
    ) -> ObjectDefinitions:
        """One definition per requested role, in request order."""
        return ObjectDefinitions(
            tuple(
                ObjectDefinition(role, self.resolve(object_type_id, operation_type, custom_operation_type, role))
                for role in roles
            )
        )

    @property
    def load_count(self) -> int:
        """Number of times the descriptor was parsed (0 or 1)."""
        return self._load_count
