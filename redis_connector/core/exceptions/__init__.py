"""
Exception Module

Structured exception hierarchy for the Redis connector, organized by theme.

Module Structure:
-----------------
- **base.py**: ConnectorBaseError base class + ConfigurationError
- **connection.py**: Store connectivity and command exceptions
- **metadata.py**: Object type descriptor and definition lookup exceptions
- **operation.py**: Operation construction and input exceptions

Usage:
------
```python
from redis_connector.core.exceptions import StoreConnectionError, DefinitionNotFoundError
```
"""

from redis_connector.core.exceptions.base import ConfigurationError, ConnectorBaseError
from redis_connector.core.exceptions.connection import (
    StoreCommandError,
    StoreConnectionError,
    StoreError,
)
from redis_connector.core.exceptions.metadata import (
    DefinitionNotFoundError,
    MetadataError,
    MetadataLoadError,
)
from redis_connector.core.exceptions.operation import (
    BadInputError,
    OperationError,
    UnsupportedObjectTypeError,
)

__all__ = [
    # Base
    "ConnectorBaseError",
    "ConfigurationError",
    # Store
    "StoreError",
    "StoreConnectionError",
    "StoreCommandError",
    # Metadata
    "MetadataError",
    "MetadataLoadError",
    "DefinitionNotFoundError",
    # Operation
    "OperationError",
    "UnsupportedObjectTypeError",
    "BadInputError",
]
