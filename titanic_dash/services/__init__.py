"""
Service layer: the dataset aggregator, the annotation manager and the
storage they persist through.
"""

from .storage import InMemoryStorage, LocalFileSystemStorage, StateStore, StorageBackend
from .dataset_service import DatasetAggregator
from .annotation_service import AnnotationManager

__all__ = [
    "StorageBackend",
    "LocalFileSystemStorage",
    "InMemoryStorage",
    "StateStore",
    "DatasetAggregator",
    "AnnotationManager",
]
