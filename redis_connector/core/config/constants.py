"""
Connector Constants and Enumerations

This module defines the connector-wide constants and enumerations shared by
the browse, connection and operation layers.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for response codes and property names
- Type-safe enums for operation verbs, roles and statuses
- Store sentinels documented in one place

Author: System Architect
Date: 2025-12-05
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Processing stages used to tag log events.

    Format: {PREFIX}.{SEQUENCE}_{DESCRIPTIVE_NAME}
    - PREFIX: Component (CONN, META, ROUTE, OP, BROWSE)
    - SEQUENCE: Numeric order inside the component
    """

    # Connection lifecycle
    SHARED_CLIENT_INIT = "CONN.0_SHARED_CLIENT_INIT"
    CONNECTION_ACQUIRE = "CONN.1_CONNECTION_ACQUIRE"
    CONNECTION_VERIFY = "CONN.2_CONNECTION_VERIFY"
    CONNECTION_RELEASE = "CONN.3_CONNECTION_RELEASE"
    SHARED_CLIENT_SHUTDOWN = "CONN.4_SHARED_CLIENT_SHUTDOWN"

    # Metadata registry
    METADATA_LOAD = "META.1_METADATA_LOAD"
    METADATA_RESOLVE = "META.2_METADATA_RESOLVE"

    # Operation routing and execution
    OPERATION_ROUTE = "ROUTE.1_OPERATION_ROUTE"
    OPERATION_EXECUTE = "OP.1_OPERATION_EXECUTE"
    STORE_COMMAND = "OP.2_STORE_COMMAND"
    OPERATION_RESULT = "OP.3_OPERATION_RESULT"

    # Browse / introspection
    BROWSE = "BROWSE.1_BROWSE"
    CONNECTION_TEST = "BROWSE.2_CONNECTION_TEST"


# ============================================================================
# Host Platform Enumerations
# ============================================================================


class OperationType(str, Enum):
    """
    Operation verbs understood by the host platform.

    EXECUTE is only used together with a custom operation type.
    """

    GET = "GET"
    UPSERT = "UPSERT"
    DELETE = "DELETE"
    EXECUTE = "EXECUTE"


class ObjectDefinitionRole(str, Enum):
    """Which side of an operation a schema applies to."""

    INPUT = "input"
    OUTPUT = "output"


class ContentType(str, Enum):
    """
    Payload kind negotiated with the host platform.

    XML: a structured schema is attached to the definition
    BINARY: untyped payload, no schema
    """

    XML = "xml"
    BINARY = "binary"


class OperationStatus(str, Enum):
    """Per-item outcome status reported back to the host platform."""

    SUCCESS = "SUCCESS"
    APPLICATION_ERROR = "APPLICATION_ERROR"
    FAILURE = "FAILURE"


class ResponseCode(str, Enum):
    """Status codes attached to each reported item."""

    OK = "OK"
    ERR = "ERR"
    NO_KEY = "NO_KEY"
    NOT_FOUND = "NOT_FOUND"
    BAD_INPUT = "BAD_INPUT"


# ============================================================================
# Object Types
# ============================================================================

OBJECT_TYPE_STRING = "String"
OBJECT_TYPE_HASHSET = "HashSet"
SUPPORTED_OBJECT_TYPES = (OBJECT_TYPE_STRING, OBJECT_TYPE_HASHSET)


# ============================================================================
# Property Names
# ============================================================================

# Connection / operation properties
PROPERTY_HOSTS = "hosts"
PROPERTY_KEY_PREFIX = "keyPrefix"
PROPERTY_THROW_ON_NOT_FOUND = "throwOnNotFound"

# Per-document dynamic properties
DYNAMIC_PROPERTY_KEY = "key"
DYNAMIC_PROPERTY_TTL = "ttl"
DYNAMIC_PROPERTY_FIELD = "field"

# Tracked payload metadata
TRACKED_PROPERTY_TTL = "ttl"

HOSTS_DELIMITER = ";"


# ============================================================================
# Store Protocol Constants
# ============================================================================

STORE_OK = "OK"  # Literal acknowledgement for SET / SETEX
PING_REPLY = "PONG"  # Literal reply to PING

TTL_NO_EXPIRY = -1  # TTL reply: key exists, no expiry (also "no TTL" on upsert)
TTL_KEY_MISSING = -2  # TTL reply: key does not exist (just expired)

DEFAULT_REDIS_SCHEME = "redis://"
SUPPORTED_REDIS_SCHEMES = ("redis", "rediss", "unix")


# ============================================================================
# Metadata Resources
# ============================================================================

METADATA_RESOURCE_PACKAGE = "redis_connector.metadata.resources"
METADATA_RESOURCE_NAME = "connector-metadata-objecttypes.xml"
METADATA_FORMAT_ATTRIBUTE = "operationMetadataResourceFormat"
OBJECT_DEFINITION_KEY_FORMAT = "{type}_{mode}"


# ============================================================================
# Messages
# ============================================================================

MESSAGE_KEY_REQUIRED = "Key is a required document property"
MESSAGE_KEY_NOT_FOUND = "Key not found"
MESSAGE_HASH_KEY_NOT_FOUND = "Key {key} not found"
MESSAGE_HASH_FIELD_NOT_FOUND = "Key {key} / field {field} not found"
MESSAGE_ID_REQUIRED = "ID is a required field"
