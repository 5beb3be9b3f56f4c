"""Test utilities for apirouter applications::

    from apirouter.testing import TestClient
"""

from apirouter.testing.client import TestClient

__all__ = ["TestClient"]
