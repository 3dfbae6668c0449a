"""
Base document store interface.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator

from issue_tracker.domain.issue import IssueDocument


class BaseDocumentStore(ABC):
    """
    Abstract base class for whole-document issue stores.

    Every mutation goes through ``transaction()``, which holds the store's
    writer lock across load, mutation and save. Plain ``load()`` calls do not
    take the lock.
    """

    def __init__(self) -> None:
        self._write_lock = asyncio.Lock()

    @abstractmethod
    async def load(self) -> IssueDocument:
        """Read the full document, recovering to the default when unusable."""
        ...

    async def save(self, document: IssueDocument) -> None:
        """Overwrite the stored document."""
        async with self._write_lock:
            await self._write(document)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[IssueDocument]:
        """
        Load the document for mutation and save it when the block succeeds.

        If the block raises, nothing is written and the in-memory changes are
        discarded.

        Example:
            async with store.transaction() as document:
                document.issues.append(issue)
        """
        async with self._write_lock:
            document = await self._load_for_update()
            yield document
            await self._write(document)

    @abstractmethod
    async def _load_for_update(self) -> IssueDocument:
        """Load while the writer lock is already held."""
        ...

    @abstractmethod
    async def _write(self, document: IssueDocument) -> None:
        """Persist while the writer lock is already held."""
        ...
