from datetime import datetime
from enum import Enum
from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from planner.services.common import ensure_utc


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ProjectStatus(str, Enum):
    planning = "planning"
    in_progress = "in-progress"
    completed = "completed"
    on_hold = "on-hold"


class TaskCategory(str, Enum):
    project = "project"
    school = "school"
    personal = "personal"
    other = "other"


class Mood(str, Enum):
    great = "great"
    good = "good"
    neutral = "neutral"
    bad = "bad"
    terrible = "terrible"


class NotificationType(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"
    success = "success"


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Trim tags, drop blanks and keep the first occurrence of each."""
    seen: List[str] = []
    for tag in tags or []:
        t = str(tag).strip()
        if t and t not in seen:
            seen.append(t)
    return seen


class _PartialUpdate(BaseModel):
    """Base for PUT bodies: every field optional, but NOT NULL columns reject an explicit null."""

    _non_nullable: ClassVar[tuple] = ()

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in self._non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self


class _UtcOut(BaseModel):
    """Stored datetimes come back naive from SQLite; present them as UTC."""

    model_config = {"from_attributes": True}

    @field_validator("*", mode="after")
    @classmethod
    def _utc(cls, value):
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value


# ---------------------------------------------------------------------------
# Project Schemas
# ---------------------------------------------------------------------------
class ProjectCreate(BaseModel):
    user_id: str = Field(..., min_length=1, description="Owner id supplied by the identity provider")
    title: str = Field(..., min_length=1, description="Project title")
    description: str = Field(..., description="What the project is about")
    due_date: Optional[datetime] = Field(None, description="Optional deadline")
    status: ProjectStatus = Field(ProjectStatus.planning, description="Lifecycle status")
    priority: Priority = Field(Priority.medium, description="Priority level")


class ProjectUpdate(_PartialUpdate):
    _non_nullable: ClassVar[tuple] = ("title", "description", "status", "priority")

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[Priority] = None


class ProjectOut(_UtcOut):
    id: str = Field(..., description="Unique identifier for the project")
    user_id: str
    title: str
    description: str
    due_date: Optional[datetime] = None
    status: ProjectStatus
    priority: Priority
    created_at: datetime


# ---------------------------------------------------------------------------
# Task Schemas
# ---------------------------------------------------------------------------
class TaskCreate(BaseModel):
    user_id: str = Field(..., min_length=1, description="Owner id supplied by the identity provider")
    title: str = Field(..., min_length=1, description="Title of the task")
    description: Optional[str] = Field(None, description="Optional details")
    due_date: Optional[datetime] = Field(None, description="Optional due date of the task")
    completed: bool = Field(False, description="Whether the task is done")
    priority: Priority = Field(Priority.medium, description="Priority level")
    project_id: Optional[str] = Field(None, description="Optional link to a project (not enforced)")
    category: TaskCategory = Field(..., description="Which view owns the task")


class TaskUpdate(_PartialUpdate):
    _non_nullable: ClassVar[tuple] = ("title", "completed", "priority", "category")

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    project_id: Optional[str] = None
    category: Optional[TaskCategory] = None


class TaskOut(_UtcOut):
    id: str = Field(..., description="Unique identifier for the task")
    user_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: bool
    priority: Priority
    project_id: Optional[str] = None
    category: TaskCategory
    created_at: datetime


# ---------------------------------------------------------------------------
# Journal Schemas
# ---------------------------------------------------------------------------
class JournalCreate(BaseModel):
    user_id: str = Field(..., min_length=1, description="Owner id supplied by the identity provider")
    title: str = Field(..., min_length=1, description="Entry title")
    content: str = Field(..., description="Full text of the journal entry")
    date: datetime = Field(..., description="The day the entry is about")
    mood: Optional[Mood] = Field(None, description="Optional mood label")
    tags: List[str] = Field(default_factory=list, description="Free-text tags, duplicates removed")

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: List[str]) -> List[str]:
        return normalize_tags(value)


class JournalUpdate(_PartialUpdate):
    _non_nullable: ClassVar[tuple] = ("title", "content", "date", "tags")

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    date: Optional[datetime] = None
    mood: Optional[Mood] = None
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return None if value is None else normalize_tags(value)


class JournalOut(_UtcOut):
    id: str = Field(..., description="Unique identifier for the journal entry")
    user_id: str
    title: str
    content: str
    date: datetime
    mood: Optional[Mood] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime


# ---------------------------------------------------------------------------
# User Schemas
# ---------------------------------------------------------------------------
class UserSync(BaseModel):
    email: str = Field(..., min_length=3, description="Email reported by the identity provider")
    display_name: Optional[str] = Field(None, description="Optional display name")


class UserOut(_UtcOut):
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Derived projections
# ---------------------------------------------------------------------------
class MessageResponse(BaseModel):
    message: str


class NotificationOut(BaseModel):
    id: str
    title: str
    message: str
    type: NotificationType
    related_id: Optional[str] = None

    model_config = {"from_attributes": True}


class DashboardCounts(BaseModel):
    projects: int
    school_tasks: int
    pending_tasks: int
    journals: int


class DashboardOut(BaseModel):
    counts: DashboardCounts
    upcoming_tasks: List[TaskOut]
    overdue_tasks: List[TaskOut]
    active_projects: List[ProjectOut]
    recent_journals: List[JournalOut]
    notifications: List[NotificationOut]


class PlannerOut(BaseModel):
    window: str
    buckets: Dict[str, List[TaskOut]] = Field(..., description="Every bucket, in display order, empty ones included")


class JournalSearchOut(BaseModel):
    tags: List[str]
    journals: List[JournalOut]
