"""Exceptions raised by collection membership operations."""

from typing import Any


class CollectionError(Exception):
    """Base class for collection membership errors."""


class DuplicateMembership(CollectionError):
    """The item is already a member of the collection."""

    def __init__(self, collection_id: Any, item_id: Any) -> None:
        """Initialize with the offending collection and item."""
        self.collection_id = collection_id
        self.item_id = item_id
        super().__init__(f"Track {item_id} is already in collection {collection_id}")


class ReorderFailed(CollectionError):
    """A reorder batch did not apply and was rolled back as a whole."""

    def __init__(self, collection_id: Any, reason: str) -> None:
        """Initialize with the collection and a human-readable reason."""
        self.collection_id = collection_id
        self.reason = reason
        super().__init__(f"Reorder of collection {collection_id} failed: {reason}")


class CollectionNotFound(CollectionError, LookupError):
    """The collection does not exist."""

    def __init__(self, collection_id: Any) -> None:
        """Initialize with the missing collection ID."""
        self.collection_id = collection_id
        super().__init__(f"Collection not found: {collection_id}")


class ItemNotFound(CollectionError, LookupError):
    """The track does not exist in the catalog."""

    def __init__(self, item_id: Any) -> None:
        """Initialize with the missing track ID."""
        self.item_id = item_id
        super().__init__(f"Track not found: {item_id}")
