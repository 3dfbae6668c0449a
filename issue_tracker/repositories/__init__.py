"""
Document store implementations.
"""

from issue_tracker.repositories.base import BaseDocumentStore
from issue_tracker.repositories.document_store import InMemoryDocumentStore, JsonDocumentStore

__all__ = [
    "BaseDocumentStore",
    "JsonDocumentStore",
    "InMemoryDocumentStore",
]
