"""Test utilities package."""

from tests.utils.storage import RecordingStorage, StorageCall

__all__ = [
    "RecordingStorage",
    "StorageCall",
]
