"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .request_factory import RequestFactory

__all__ = ["RequestFactory"]
