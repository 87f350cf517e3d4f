"""Local and remote persistence for genesis-tracker."""

from .local import FileBackend, LocalStore, MemoryBackend
from .mapping import FIELD_MAPPINGS, FieldMapping, to_local, to_remote
from .namespaces import MIGRATED_NAMESPACES, Collection, Namespace

__all__ = [
    "Collection",
    "FIELD_MAPPINGS",
    "FieldMapping",
    "FileBackend",
    "LocalStore",
    "MemoryBackend",
    "MIGRATED_NAMESPACES",
    "Namespace",
    "to_local",
    "to_remote",
]
