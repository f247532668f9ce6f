"""
Core domain layer: passenger records, the dataset snapshot and its derived
aggregates, annotations, the view base class and the view registry
"""

from .record import Record
from .dataset import Dataset
from .annotation import Annotation

__all__ = ["Record", "Dataset", "Annotation"]
