"""
Pytest configuration and fixtures.
"""

from pathlib import Path

import pytest

from issue_tracker.repositories.document_store import InMemoryDocumentStore, JsonDocumentStore
from issue_tracker.services.issue_service import IssueService


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Location of the issue document for one test (not created yet)."""
    return tmp_path / ".data" / "db.json"


@pytest.fixture
def json_store(data_file: Path) -> JsonDocumentStore:
    """File-backed store writing to the per-test data file."""
    return JsonDocumentStore(data_file)


@pytest.fixture
def issue_service(json_store: JsonDocumentStore) -> IssueService:
    """Issue service over the file-backed store."""
    return IssueService(store=json_store)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """In-memory store that counts writes."""
    return InMemoryDocumentStore()


@pytest.fixture
def memory_service(memory_store: InMemoryDocumentStore) -> IssueService:
    """Issue service over the in-memory store."""
    return IssueService(store=memory_store)
