"""Services package."""

from daybook.services.storage import (
    ConnectionError,
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryTransactionStorage,
    LocalFileTransactionStorage,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    "ConnectionError",
    "GoogleSheetsClient",
    "GoogleSheetsTransactionStorage",
    "InMemoryTransactionStorage",
    "LocalFileTransactionStorage",
    "NotFoundError",
    "StorageError",
    "TransactionStorageInterface",
]
