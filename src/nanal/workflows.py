"""Wiring between configuration, storage adapters and the engine."""

from pathlib import Path

from .adapters.composite_store import CompositeItemStore
from .adapters.file_store import FileItemStore
from .adapters.records import goals_from_document, tasks_from_document
from .adapters.remote_store import RemoteItemStore, RemoteStoreError
from .config import DATA_DIR, Config
from .engine import CalendarEngine


def get_local_store(config: Config) -> FileItemStore:
    """Resolve the local data file from config."""
    if config.data_file:
        return FileItemStore(Path(config.data_file).expanduser())
    return FileItemStore(DATA_DIR / "nanal.json")


def get_store(config: Config) -> CompositeItemStore:
    """Remote store (if configured) with the local file as fallback."""
    return CompositeItemStore(
        local=get_local_store(config),
        remote=RemoteItemStore.from_config(config),
    )


def get_engine(config: Config) -> CalendarEngine:
    return CalendarEngine(get_store(config))


def _counts(document: dict) -> tuple[int, int]:
    return len(tasks_from_document(document)), len(goals_from_document(document))


def pull(config: Config) -> tuple[int, int]:
    """
    Replace the local file with the remote document.

    The document is written through unchanged, so collections and fields
    nanal does not model survive the copy. Returns (task_count, goal_count).
    Raises RemoteStoreError on failure or when the remote holds no document,
    and ValueError when no remote is configured.
    """
    remote = RemoteItemStore.from_config(config)
    if remote is None:
        raise ValueError("No remote store configured (set REMOTE_URL and REMOTE_USER)")
    document = remote.load()
    if not document:
        raise RemoteStoreError("No backup found on the remote store")
    get_local_store(config).write(document)
    return _counts(document)


def push(config: Config) -> tuple[int, int]:
    """
    Back up the whole local document to the remote store.

    Returns (task_count, goal_count). Raises RemoteStoreError on failure
    and ValueError when no remote is configured or the local file is empty.
    """
    remote = RemoteItemStore.from_config(config)
    if remote is None:
        raise ValueError("No remote store configured (set REMOTE_URL and REMOTE_USER)")
    local = get_local_store(config)
    document = local.load()
    if not document:
        raise ValueError(f"Nothing to push: {local.path} is missing or empty")
    remote.save(document)
    return _counts(document)
