"""
Domain models.
"""

from issue_tracker.domain.issue import (
    Bug,
    CreateIssueInput,
    Epic,
    Issue,
    IssueDocument,
    Story,
    Subtask,
    Task,
)

__all__ = [
    "Issue",
    "Task",
    "Story",
    "Bug",
    "Epic",
    "Subtask",
    "IssueDocument",
    "CreateIssueInput",
]
