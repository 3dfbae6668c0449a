"""
Service layer implementations.
"""

from issue_tracker.services.container import ServiceContainer, get_issue_service
from issue_tracker.services.issue_service import IssueService, resolve_issue_type

__all__ = [
    "IssueService",
    "ServiceContainer",
    "get_issue_service",
    "resolve_issue_type",
]
