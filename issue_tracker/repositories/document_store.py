"""
Document stores holding the whole issue collection as one JSON document.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from issue_tracker.core.exceptions import DocumentCorruptedError
from issue_tracker.core.logging import get_logger
from issue_tracker.domain.issue import IssueDocument
from issue_tracker.repositories.base import BaseDocumentStore

logger = get_logger(__name__)


def has_document_shape(data: Any) -> bool:
    """Check the top-level shape: an object with an issues list and an integer counter."""
    if not isinstance(data, dict):
        return False
    counter = data.get("issueKeyCounter")
    return (
        isinstance(data.get("issues"), list)
        and isinstance(counter, int)
        and not isinstance(counter, bool)
    )


class JsonDocumentStore(BaseDocumentStore):
    """
    File-backed store writing the document as indented JSON.

    Missing, empty, unparsable or wrongly shaped files are replaced by the
    default document. Other I/O errors propagate. Saves go through a temporary
    file and ``os.replace`` so readers never see a partial document.
    """

    def __init__(self, path: Path | str, indent: int = 2) -> None:
        super().__init__()
        self.path = Path(path)
        self.indent = indent

    async def load(self) -> IssueDocument:
        """Load the document, resetting it to the default when unusable."""
        data, _ = await asyncio.to_thread(self._read)
        if data is not None:
            return self._parse(data)

        # Re-read under the lock so recovery cannot clobber a concurrent commit
        async with self._write_lock:
            return await self._load_for_update()

    async def _load_for_update(self) -> IssueDocument:
        data, reason = await asyncio.to_thread(self._read)
        if data is not None:
            return self._parse(data)
        return await self._recover(reason)

    async def _recover(self, reason: Optional[str]) -> IssueDocument:
        logger.warning(
            "Issue document unusable, resetting to default",
            path=str(self.path),
            reason=reason,
        )
        document = IssueDocument.default()
        await self._write(document)
        return document

    async def _write(self, document: IssueDocument) -> None:
        payload = json.dumps(document.to_json_dict(), indent=self.indent)
        await asyncio.to_thread(self._replace, payload)
        logger.debug(
            "Issue document saved",
            path=str(self.path),
            issues=len(document.issues),
            issue_key_counter=document.issue_key_counter,
        )

    def _read(self) -> tuple[Optional[dict[str, Any]], Optional[str]]:
        """Return (data, None) when usable, otherwise (None, reason)."""
        try:
            text = self.path.read_text(encoding="utf-8-sig")
        except FileNotFoundError:
            return None, "missing"
        except UnicodeDecodeError:
            return None, "invalid_json"

        if not text.strip():
            return None, "empty"

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return None, "invalid_json"

        if not has_document_shape(data):
            return None, "invalid_shape"
        return data, None

    def _replace(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _parse(self, data: dict[str, Any]) -> IssueDocument:
        try:
            return IssueDocument.model_validate(data)
        except PydanticValidationError as e:
            raise DocumentCorruptedError(str(self.path), str(e)) from e


class InMemoryDocumentStore(BaseDocumentStore):
    """
    In-memory document store for development/testing.

    Keeps the serialized JSON form so every load hands out an independent copy.
    """

    def __init__(self, initial: Optional[IssueDocument] = None) -> None:
        super().__init__()
        self._data: Optional[dict[str, Any]] = initial.to_json_dict() if initial else None
        self.write_count = 0

    async def load(self) -> IssueDocument:
        if self._data is None:
            async with self._write_lock:
                return await self._load_for_update()
        return IssueDocument.model_validate(self._data)

    async def _load_for_update(self) -> IssueDocument:
        if self._data is None:
            document = IssueDocument.default()
            await self._write(document)
            return document
        return IssueDocument.model_validate(self._data)

    async def _write(self, document: IssueDocument) -> None:
        self._data = document.to_json_dict()
        self.write_count += 1
