"""
Storage Services Package

Provides the abstract interface and the interchangeable backends:
in-memory, local JSON file and Google Sheets.
"""

from daybook.services.storage.interface import (
    ConnectionError,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from daybook.services.storage.memory import InMemoryTransactionStorage
from daybook.services.storage.local_file import LocalFileTransactionStorage
from daybook.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
)

__all__ = [
    # Interface
    "TransactionStorageInterface",
    # Exceptions
    "ConnectionError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsTransactionStorage",
    "InMemoryTransactionStorage",
    "LocalFileTransactionStorage",
]
