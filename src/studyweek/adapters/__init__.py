"""Adapters - I/O implementations of ports."""

from .file_store import FileStore
from .rest_api import RestStoreAdapter
from .ics import generate_ics, ics_file_name, subscription_url

__all__ = [
    "FileStore",
    "RestStoreAdapter",
    "generate_ics",
    "ics_file_name",
    "subscription_url",
]
