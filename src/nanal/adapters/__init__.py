"""Adapters - I/O implementations of ports."""

from .file_store import FileItemStore
from .remote_store import RemoteItemStore, RemoteStoreError
from .composite_store import CompositeItemStore

__all__ = [
    "FileItemStore",
    "RemoteItemStore",
    "RemoteStoreError",
    "CompositeItemStore",
]
