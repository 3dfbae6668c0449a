"""
Service wiring for the request layer.
"""

from pathlib import Path
from typing import Optional

from issue_tracker.core.config import settings
from issue_tracker.core.logging import get_logger, setup_logging
from issue_tracker.repositories.document_store import JsonDocumentStore
from issue_tracker.services.issue_service import IssueService

logger = get_logger(__name__)


class ServiceContainer:
    """
    Container for all application services.
    Provides singleton instances of services.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._initialized = False

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def initialize(self, data_file: Optional[Path | str] = None) -> None:
        """
        Initialize all services.

        Args:
            data_file: Override for the configured storage location
        """
        if self._initialized:
            return

        setup_logging()

        path = Path(data_file or settings.storage.data_file)
        self._document_store = JsonDocumentStore(path, indent=settings.storage.indent)
        self._issue_service = IssueService(store=self._document_store)

        logger.info("Service container initialized", data_file=str(path))
        self._initialized = True

    def reset(self) -> None:
        """
        Drop the wired services so the next access rebuilds them.

        Services obtained before the reset keep their old document store and
        its writer lock. Do not use them afterwards: their writes would not be
        serialized with those of the rebuilt services.
        """
        self._initialized = False

    @property
    def document_store(self) -> JsonDocumentStore:
        """Get the document store."""
        self.initialize()
        return self._document_store

    @property
    def issue_service(self) -> IssueService:
        """Get the issue service."""
        self.initialize()
        return self._issue_service


# Singleton container instance
container = ServiceContainer.get_instance()


def get_issue_service() -> IssueService:
    """Get the issue service instance."""
    return container.issue_service
