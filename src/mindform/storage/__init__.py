"""
Storage adapters for forms and submissions.
"""

from mindform.config import get_config
from mindform.storage.base import FormStore
from mindform.storage.json_file import JsonFileFormStore
from mindform.storage.memory import InMemoryFormStore


def create_store(backend: str | None = None) -> FormStore:
    """Build the store selected by ``backend`` or by configuration."""
    config = get_config()
    backend = backend or config.storage_backend

    if backend == "memory":
        return InMemoryFormStore()
    if backend == "json":
        return JsonFileFormStore(config.storage_dir)
    raise ValueError(f"Unknown storage backend: {backend}. Use 'memory' or 'json'.")


__all__ = [
    "FormStore",
    "InMemoryFormStore",
    "JsonFileFormStore",
    "create_store",
]
