"""
Issue domain model and the persisted issue document.

Issues form a tagged union on ``issueType``. The fields every variant shares
live on ``IssueFields``; each variant adds its discriminator and any
variant-specific fields. Serialized form is flat camelCase JSON.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from issue_tracker.core.constants import INITIAL_ISSUE_KEY_COUNTER, IssueStatus, IssueType
from issue_tracker.core.keys import generate_issue_key


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class IssueFields(BaseModel):
    """Fields shared by every issue variant."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
    )

    id: str = Field(..., description="Opaque unique identifier (UUID)")
    key: str = Field(..., description="Human-readable key, e.g. TASK-3")
    summary: str = Field(..., min_length=1, description="Issue title")
    description: str = Field(default="")
    status: IssueStatus = Field(default=IssueStatus.TODO)
    created_at: datetime
    updated_at: datetime
    parent_key: Optional[str] = Field(default=None, description="Key of the parent issue")

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    def touch(self, timestamp: Optional[datetime] = None) -> None:
        """Mark the issue as modified."""
        self.updated_at = timestamp or utc_now()


class Task(IssueFields):
    """A unit of work, optionally under an Epic."""

    issue_type: Literal["Task"] = "Task"


class Story(IssueFields):
    """A user-facing feature, optionally under an Epic."""

    issue_type: Literal["Story"] = "Story"


class Bug(IssueFields):
    """A defect. Never has a parent."""

    issue_type: Literal["Bug"] = "Bug"


class Epic(IssueFields):
    """A large body of work that tracks the keys of its children."""

    issue_type: Literal["Epic"] = "Epic"
    child_issue_keys: list[str] = Field(default_factory=list)

    def attach_child(self, child_key: str, timestamp: Optional[datetime] = None) -> None:
        """Record a child key and bump updated_at."""
        if child_key not in self.child_issue_keys:
            self.child_issue_keys.append(child_key)
        self.touch(timestamp)


class Subtask(IssueFields):
    """A piece of an Epic or Story. The parent is mandatory."""

    issue_type: Literal["Subtask"] = "Subtask"
    parent_key: str = Field(..., min_length=1)


Issue = Annotated[
    Union[Task, Story, Epic, Bug, Subtask],
    Field(discriminator="issue_type"),
]

ISSUE_MODELS: dict[IssueType, type[IssueFields]] = {
    IssueType.TASK: Task,
    IssueType.STORY: Story,
    IssueType.EPIC: Epic,
    IssueType.BUG: Bug,
    IssueType.SUBTASK: Subtask,
}


class IssueDocument(BaseModel):
    """The whole persisted state: every issue plus the key counter."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    issues: list[Issue] = Field(default_factory=list)
    issue_key_counter: StrictInt = Field(default=INITIAL_ISSUE_KEY_COUNTER)

    @classmethod
    def default(cls) -> "IssueDocument":
        """Empty document used when nothing usable is stored."""
        return cls(issues=[], issue_key_counter=INITIAL_ISSUE_KEY_COUNTER)

    def find(self, key: str) -> Optional[Issue]:
        """Return the issue with the given key, if any."""
        for issue in self.issues:
            if issue.key == key:
                return issue
        return None

    def children_of(self, parent_key: str) -> list[Issue]:
        """Issues whose parentKey is parent_key, in insertion order."""
        return [issue for issue in self.issues if issue.parent_key == parent_key]

    def allocate_key(self, issue_type: IssueType) -> str:
        """
        Take the next key from the shared counter.

        Keys already present in the document are skipped, so a counter that
        lags behind the stored issues never hands out a duplicate.
        """
        taken = {issue.key for issue in self.issues}
        while True:
            key = generate_issue_key(self.issue_key_counter, issue_type)
            self.issue_key_counter += 1
            if key not in taken:
                return key

    def to_json_dict(self) -> dict:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class CreateIssueInput(BaseModel):
    """Issue creation request as received from the request layer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    issue_type_name: Optional[str] = None
    parent_key: Optional[str] = None
