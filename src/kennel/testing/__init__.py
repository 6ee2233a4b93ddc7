"""Test utilities for kennel applications.

Provides an in-process ASGI test client and JSON response assertions::

    from kennel.testing import TestClient, assert_message
"""

from kennel.testing.assertions import assert_json, assert_message
from kennel.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_json",
    "assert_message",
]
