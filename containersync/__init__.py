"""containersync - push generated container sources to per-container git repos."""

from .errors import SyncError
from .synchronizer import ContainerResult, RepositorySynchronizer, SyncReport

__version__ = "0.1.0"

__all__ = [
    "ContainerResult",
    "RepositorySynchronizer",
    "SyncError",
    "SyncReport",
]
