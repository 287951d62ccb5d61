"""
Adapters layer - External integrations (hosted salon database).
"""

from .mock_store import MockStorageClient
from .rest_client import RestStorageClient

__all__ = ["MockStorageClient", "RestStorageClient"]
