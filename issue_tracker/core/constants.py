"""
System-wide constants for the issue tracker.
"""

from enum import Enum


# =============================================================================
# Enums
# =============================================================================


class IssueType(str, Enum):
    """The five issue variants."""

    TASK = "Task"
    STORY = "Story"
    EPIC = "Epic"
    BUG = "Bug"
    SUBTASK = "Subtask"


class IssueStatus(str, Enum):
    """Issue workflow states."""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


# =============================================================================
# Issue Type Resolution
# =============================================================================

DEFAULT_ISSUE_TYPE = IssueType.TASK

# Normalized (trimmed, casefolded) names accepted by create_issue
ISSUE_TYPE_ALIASES = {
    "task": IssueType.TASK,
    "story": IssueType.STORY,
    "feature": IssueType.STORY,
    "epic": IssueType.EPIC,
    "bug": IssueType.BUG,
    "subtask": IssueType.SUBTASK,
}

# =============================================================================
# Key Generation
# =============================================================================

ISSUE_KEY_PREFIXES = {
    IssueType.TASK: "TASK",
    IssueType.STORY: "STOR",
    IssueType.BUG: "BUG",
    IssueType.EPIC: "EPIC",
    IssueType.SUBTASK: "SUBT",
}

# First counter value of a fresh document, so the first key is e.g. TASK-0
INITIAL_ISSUE_KEY_COUNTER = 0

# =============================================================================
# Hierarchy Rules
# =============================================================================

# Allowed parent types per child type. Types missing here take no parent.
ALLOWED_PARENT_TYPES = {
    IssueType.TASK: frozenset({IssueType.EPIC}),
    IssueType.STORY: frozenset({IssueType.EPIC}),
    IssueType.SUBTASK: frozenset({IssueType.EPIC, IssueType.STORY}),
}

PARENT_REQUIRED_TYPES = frozenset({IssueType.SUBTASK})

# Only these parents keep a childIssueKeys list
CHILD_TRACKING_TYPES = frozenset({IssueType.EPIC})

# =============================================================================
# Status Defaults
# =============================================================================

DEFAULT_STATUS = IssueStatus.TODO
DEFAULT_STATUS_BY_TYPE = {
    IssueType.BUG: IssueStatus.IN_PROGRESS,
}
