"""
Synchronizing client for the DSA Flash API.

The API is the primary store; a local file cache mirrors it and stands in
whenever the API cannot be reached.
"""

from dsa_flash.client.app import open_store
from dsa_flash.client.icons import resolve_icon
from dsa_flash.client.store import StoreState, StudyStore, parse_tags

__all__ = ["StoreState", "StudyStore", "open_store", "parse_tags", "resolve_icon"]
