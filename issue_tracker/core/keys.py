"""
Issue key generation.
"""

from issue_tracker.core.constants import ISSUE_KEY_PREFIXES, IssueType


def generate_issue_key(counter: int, issue_type: IssueType) -> str:
    """
    Build the human-readable key for an issue.

    Args:
        counter: Document counter value observed before the increment
        issue_type: Resolved issue type

    Returns:
        Key such as "EPIC-4"
    """
    return f"{ISSUE_KEY_PREFIXES[IssueType(issue_type)]}-{counter}"
