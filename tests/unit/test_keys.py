"""
Unit tests for issue key generation and type resolution.
"""

import pytest

from issue_tracker.core.constants import IssueType
from issue_tracker.core.exceptions import InvalidIssueTypeError
from issue_tracker.core.keys import generate_issue_key
from issue_tracker.services.issue_service import default_status, resolve_issue_type


@pytest.mark.parametrize(
    ("issue_type", "expected"),
    [
        (IssueType.TASK, "TASK-0"),
        (IssueType.STORY, "STOR-0"),
        (IssueType.BUG, "BUG-0"),
        (IssueType.EPIC, "EPIC-0"),
        (IssueType.SUBTASK, "SUBT-0"),
    ],
)
def test_generate_issue_key_prefixes(issue_type: IssueType, expected: str) -> None:
    """Each type maps to its fixed prefix."""
    assert generate_issue_key(0, issue_type) == expected


def test_generate_issue_key_uses_counter_verbatim() -> None:
    """The numeric suffix is the counter value, unpadded."""
    assert generate_issue_key(42, IssueType.EPIC) == "EPIC-42"


def test_generate_issue_key_accepts_type_value() -> None:
    """Plain type names stored on issues are accepted."""
    assert generate_issue_key(7, "Subtask") == "SUBT-7"


class TestResolveIssueType:
    """Tests for resolve_issue_type."""

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_defaults_to_task(self, name) -> None:
        assert resolve_issue_type(name) is IssueType.TASK

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Task", IssueType.TASK),
            ("story", IssueType.STORY),
            ("feature", IssueType.STORY),
            ("  EPIC ", IssueType.EPIC),
            ("Bug", IssueType.BUG),
            ("subTask", IssueType.SUBTASK),
        ],
    )
    def test_aliases_are_case_and_space_insensitive(self, name: str, expected: IssueType) -> None:
        assert resolve_issue_type(name) is expected

    def test_unknown_name_rejected(self) -> None:
        with pytest.raises(InvalidIssueTypeError) as exc_info:
            resolve_issue_type("Initiative")

        assert exc_info.value.code == "INVALID_ISSUE_TYPE"
        assert exc_info.value.status_code == 400


def test_default_status_per_type() -> None:
    """Bugs start In Progress, everything else Todo."""
    assert default_status(IssueType.BUG) == "In Progress"
    for issue_type in (IssueType.TASK, IssueType.STORY, IssueType.EPIC, IssueType.SUBTASK):
        assert default_status(issue_type) == "Todo"
