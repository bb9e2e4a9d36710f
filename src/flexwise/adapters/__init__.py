"""Adapters - I/O implementations of ports."""

from .json_store import JsonTaskStore, DataFileError
from .mock_data import MockSchoolData

__all__ = [
    "JsonTaskStore",
    "DataFileError",
    "MockSchoolData",
]
