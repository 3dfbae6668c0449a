"""
Custom exception hierarchy for the issue tracker.
Provides structured error handling with proper HTTP status codes.
"""

from typing import Any, Optional


class IssueTrackerError(Exception):
    """Base exception for all issue tracker errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(IssueTrackerError):
    """Request validation failed."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details=details,
            status_code=400,
        )


class MissingTitleError(ValidationError):
    """Issue title is missing or blank."""

    def __init__(self) -> None:
        super().__init__(message="Issue title is required.", details={"field": "title"})
        self.code = "MISSING_TITLE"


class InvalidIssueTypeError(ValidationError):
    """Issue type name does not match any known type."""

    def __init__(self, issue_type_name: str) -> None:
        super().__init__(
            message=f"Invalid issue type: '{issue_type_name}'",
            details={"field": "issueTypeName", "value": issue_type_name},
        )
        self.code = "INVALID_ISSUE_TYPE"


class InvalidParentKeyError(ValidationError):
    """A required parent key was not supplied."""

    def __init__(self, issue_type: str) -> None:
        super().__init__(
            message=f"{issue_type} creation requires a parentKey.",
            details={"field": "parentKey", "issue_type": issue_type},
        )
        self.code = "INVALID_PARENT_KEY"


class InvalidParentTypeError(ValidationError):
    """The parent exists but its type cannot hold this child."""

    def __init__(self, issue_type: str, parent_key: str, parent_type: str) -> None:
        super().__init__(
            message=(
                f"Parent issue '{parent_key}' is a {parent_type}; "
                f"a {issue_type} cannot be created under it."
            ),
            details={
                "field": "parentKey",
                "issue_type": issue_type,
                "parent_key": parent_key,
                "parent_type": parent_type,
            },
        )
        self.code = "INVALID_PARENT_TYPE"


class ParentNotAllowedError(ValidationError):
    """The issue type never takes a parent."""

    def __init__(self, issue_type: str, parent_key: str) -> None:
        super().__init__(
            message=f"A {issue_type} cannot have a parent issue.",
            details={"field": "parentKey", "issue_type": issue_type, "parent_key": parent_key},
        )
        self.code = "PARENT_NOT_ALLOWED"


# =============================================================================
# Not Found Errors (404)
# =============================================================================


class NotFoundError(IssueTrackerError):
    """Requested resource not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        msg = message or f"{resource_type} not found"
        if resource_id and not message:
            msg = f"{resource_type} with key '{resource_id}' not found"

        super().__init__(
            message=msg,
            code="NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id},
            status_code=404,
        )


class ParentIssueNotFoundError(NotFoundError):
    """Parent issue named by parentKey does not exist."""

    def __init__(self, parent_key: str) -> None:
        super().__init__(
            resource_type="Parent issue",
            resource_id=parent_key,
        )
        self.code = "PARENT_ISSUE_NOT_FOUND"


class IssueNotFoundError(NotFoundError):
    """Issue not found."""

    def __init__(self, key: str) -> None:
        super().__init__(resource_type="Issue", resource_id=key)
        self.code = "ISSUE_NOT_FOUND"


# =============================================================================
# Internal Errors (500)
# =============================================================================


class InternalError(IssueTrackerError):
    """Unexpected failure while processing a request."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code="INTERNAL_ERROR",
            details=details,
            status_code=500,
        )


class DocumentCorruptedError(InternalError):
    """Stored document has a valid shape but holds unreadable issue records."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            message=f"Issue document at {path} contains invalid records",
            details={"path": path, "reason": reason},
        )
        self.code = "DOCUMENT_CORRUPTED"
