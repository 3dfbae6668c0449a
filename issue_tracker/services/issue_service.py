"""
Issue service: creation with hierarchy consistency, plus read helpers.
"""

import uuid
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from issue_tracker.core.constants import (
    ALLOWED_PARENT_TYPES,
    CHILD_TRACKING_TYPES,
    DEFAULT_ISSUE_TYPE,
    DEFAULT_STATUS,
    DEFAULT_STATUS_BY_TYPE,
    ISSUE_TYPE_ALIASES,
    PARENT_REQUIRED_TYPES,
    IssueStatus,
    IssueType,
)
from issue_tracker.core.exceptions import (
    InternalError,
    InvalidIssueTypeError,
    InvalidParentKeyError,
    InvalidParentTypeError,
    IssueNotFoundError,
    IssueTrackerError,
    MissingTitleError,
    ParentIssueNotFoundError,
    ParentNotAllowedError,
    ValidationError,
)
from issue_tracker.core.logging import get_logger
from issue_tracker.domain.issue import (
    ISSUE_MODELS,
    CreateIssueInput,
    Issue,
    IssueDocument,
    utc_now,
)
from issue_tracker.repositories.base import BaseDocumentStore

logger = get_logger(__name__)


def resolve_issue_type(issue_type_name: Optional[str]) -> IssueType:
    """
    Map a client-supplied type name to an IssueType.

    Blank or missing names resolve to Task. Matching ignores surrounding
    whitespace and case; "feature" is accepted for Story.

    Raises:
        InvalidIssueTypeError: If the name matches no type
    """
    if issue_type_name is None or not issue_type_name.strip():
        return DEFAULT_ISSUE_TYPE

    issue_type = ISSUE_TYPE_ALIASES.get(issue_type_name.strip().casefold())
    if issue_type is None:
        raise InvalidIssueTypeError(issue_type_name)
    return issue_type


def default_status(issue_type: IssueType) -> IssueStatus:
    """Initial status for a new issue of the given type."""
    return DEFAULT_STATUS_BY_TYPE.get(issue_type, DEFAULT_STATUS)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class IssueService:
    """
    Service for creating and reading issues.

    All creations run inside a single store transaction, so concurrent calls
    are applied one after another against the latest committed document.
    """

    def __init__(self, store: BaseDocumentStore) -> None:
        """
        Initialize the issue service.

        Args:
            store: Document store holding every issue and the key counter
        """
        self.store = store

    async def create_issue(
        self,
        data: Union[CreateIssueInput, dict[str, Any]],
    ) -> Issue:
        """
        Create an issue, link it to its parent and persist the document.

        Args:
            data: Creation input (title, description, issueTypeName, parentKey)

        Returns:
            The newly created issue

        Raises:
            ValidationError: Title, type or parent rules violated (400)
            ParentIssueNotFoundError: parentKey names no issue (404)
            InternalError: Storage or other unexpected failure (500)
        """
        try:
            return await self._create_issue(data)
        except IssueTrackerError as e:
            if e.status_code < 500:
                logger.info("Issue creation rejected", code=e.code, reason=e.message)
            else:
                logger.error("Issue creation failed", code=e.code, reason=e.message)
            raise
        except Exception as e:
            logger.exception("Unexpected error creating issue")
            raise InternalError(
                "Failed to create issue due to an unexpected error.",
                details={"cause": type(e).__name__},
            ) from e

    async def _create_issue(self, data: Union[CreateIssueInput, dict[str, Any]]) -> Issue:
        request = self._coerce_input(data)

        title = (request.title or "").strip()
        if not title:
            raise MissingTitleError()

        issue_type = resolve_issue_type(request.issue_type_name)
        parent_key = _blank_to_none(request.parent_key)

        if parent_key is None and issue_type in PARENT_REQUIRED_TYPES:
            raise InvalidParentKeyError(issue_type.value)

        async with self.store.transaction() as document:
            parent = self._resolve_parent(document, issue_type, parent_key)

            now = utc_now()
            model = ISSUE_MODELS[issue_type]
            issue = model(
                id=str(uuid.uuid4()),
                key=document.allocate_key(issue_type),
                summary=title,
                description=request.description or "",
                status=default_status(issue_type),
                created_at=now,
                updated_at=now,
                parent_key=parent_key,
            )
            document.issues.append(issue)

            if parent is not None and IssueType(parent.issue_type) in CHILD_TRACKING_TYPES:
                parent.attach_child(issue.key, now)

        logger.info(
            "Issue created",
            key=issue.key,
            issue_type=issue_type.value,
            parent_key=parent_key,
        )
        return issue

    def _coerce_input(self, data: Union[CreateIssueInput, dict[str, Any]]) -> CreateIssueInput:
        if isinstance(data, CreateIssueInput):
            return data
        try:
            return CreateIssueInput.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid issue creation input",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from None

    def _resolve_parent(
        self,
        document: IssueDocument,
        issue_type: IssueType,
        parent_key: Optional[str],
    ) -> Optional[Issue]:
        """Find the parent and check it may hold an issue of this type."""
        if parent_key is None:
            return None

        parent = document.find(parent_key)
        if parent is None:
            raise ParentIssueNotFoundError(parent_key)

        allowed = ALLOWED_PARENT_TYPES.get(issue_type)
        if allowed is None:
            raise ParentNotAllowedError(issue_type.value, parent_key)

        parent_type = IssueType(parent.issue_type)
        if parent_type not in allowed:
            raise InvalidParentTypeError(issue_type.value, parent_key, parent_type.value)

        return parent

    async def get_issue_by_key(self, key: str) -> Optional[Issue]:
        """Get an issue by its key, or None if no issue has it."""
        document = await self.store.load()
        return document.find(key)

    async def list_issues(self) -> list[Issue]:
        """All issues in insertion order."""
        document = await self.store.load()
        return list(document.issues)

    async def get_child_issues(self, parent_key: str) -> list[Issue]:
        """
        Get the direct children of an issue.

        Args:
            parent_key: Key of the parent issue

        Returns:
            Issues whose parentKey is parent_key, in insertion order

        Raises:
            IssueNotFoundError: If no issue has parent_key
        """
        document = await self.store.load()
        if document.find(parent_key) is None:
            raise IssueNotFoundError(parent_key)
        return document.children_of(parent_key)
