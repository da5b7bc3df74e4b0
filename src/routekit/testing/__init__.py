"""Test utilities for routekit applications.

    from routekit.testing import TestClient
"""

from routekit.testing.client import TestClient

__all__ = [
    "TestClient",
]
