"""
Operations Module

CRUD handlers for the String and HashSet object types, the router that
selects them, and the host platform envelope models they consume.
"""

from .delete import DeleteHashSetOperation, DeleteOperation
from .get import GetHashSetOperation, GetStringOperation
from .router import OperationRouter
from .upsert import UpsertHashSetOperation, UpsertStringOperation

__all__ = [
    "DeleteHashSetOperation",
    "DeleteOperation",
    "GetHashSetOperation",
    "GetStringOperation",
    "OperationRouter",
    "UpsertHashSetOperation",
    "UpsertStringOperation",
]
