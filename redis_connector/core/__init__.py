"""
Core Module

Foundational components: configuration, logging, and exceptions.
"""

from .exceptions import (
    BadInputError,
    ConfigurationError,
    ConnectorBaseError,
    DefinitionNotFoundError,
    MetadataLoadError,
    StoreCommandError,
    StoreConnectionError,
    UnsupportedObjectTypeError,
)
from .logging import get_logger, setup_logging

__all__ = [
    "BadInputError",
    "ConfigurationError",
    "ConnectorBaseError",
    "DefinitionNotFoundError",
    "MetadataLoadError",
    "StoreCommandError",
    "StoreConnectionError",
    "UnsupportedObjectTypeError",
    "get_logger",
    "setup_logging",
]
