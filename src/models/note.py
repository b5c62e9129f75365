"""Property note and comment models."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class NoteType(str, Enum):
    """Category of a private property note."""
    GENERAL = "general"
    VIEWING = "viewing"
    FINANCIAL = "financial"
    MARKET = "market"
    MAINTENANCE = "maintenance"
    PERSONAL = "personal"


class NotePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class NoteMetadata(BaseModel):
    word_count: int = 0
    priority: NotePriority = NotePriority.MEDIUM
    is_pinned: bool = False
    location: Optional[str] = None
    viewing_date: Optional[datetime] = None
    price: Optional[float] = None
    rating: Optional[int] = Field(None, ge=1, le=5, description="1-5 star rating")


class PropertyNote(BaseModel):
    """A note a user keeps about a property."""
    id: str = Field(..., description="Note ID")
    property_id: str = Field(..., description="Property the note is about")
    user_id: str = Field(..., description="Author")
    title: str
    content: str
    type: NoteType = NoteType.GENERAL
    tags: list[str] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list, description="Attachment URLs")
    is_private: bool = True
    created_at: datetime
    updated_at: datetime
    metadata: NoteMetadata = Field(default_factory=NoteMetadata)


class CommentEdit(BaseModel):
    id: str
    content: str = Field(..., description="Content before the edit")
    edited_at: datetime
    reason: str = "User edit"


class CommentMetadata(BaseModel):
    word_count: int = 0
    is_edited: bool = False
    edit_history: list[CommentEdit] = Field(default_factory=list)
    reported_count: int = 0
    is_highlighted: bool = False


class PropertyComment(BaseModel):
    """A public comment on a property; replies are nested on read."""
    id: str
    property_id: str
    user_id: str
    content: str
    parent_id: Optional[str] = Field(None, description="Parent comment for replies")
    replies: list["PropertyComment"] = Field(default_factory=list)
    likes: int = 0
    dislikes: int = 0
    is_approved: bool = False
    is_moderated: bool = False
    moderation_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    metadata: CommentMetadata = Field(default_factory=CommentMetadata)


class CreateNoteRequest(BaseModel):
    property_id: str
    title: str
    content: str
    type: NoteType = NoteType.GENERAL
    tags: list[str] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)
    is_private: bool = True
    priority: Optional[NotePriority] = None
    location: Optional[str] = None
    viewing_date: Optional[datetime] = None
    price: Optional[float] = None
    rating: Optional[int] = Field(None, ge=1, le=5)


class UpdateNoteRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    type: Optional[NoteType] = None
    tags: Optional[list[str]] = None
    attachments: Optional[list[str]] = None
    is_private: Optional[bool] = None
    priority: Optional[NotePriority] = None
    is_pinned: Optional[bool] = None


class CreateCommentRequest(BaseModel):
    property_id: str
    content: str
    parent_id: Optional[str] = None


class UpdateCommentRequest(BaseModel):
    content: str


class NotesFilter(BaseModel):
    user_id: Optional[str] = None
    type: Optional[NoteType] = None
    is_private: Optional[bool] = None
    priority: Optional[NotePriority] = None
    tags: Optional[list[str]] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None


class CommentsFilter(BaseModel):
    user_id: Optional[str] = None
    parent_id: Optional[str] = None
    is_approved: Optional[bool] = None
    is_moderated: Optional[bool] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None


class TagCount(BaseModel):
    tag: str
    count: int


class DailyActivity(BaseModel):
    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    notes_created: int
    comments_created: int


class NotesAnalytics(BaseModel):
    total_notes: int
    notes_by_type: dict[str, int]
    notes_by_priority: dict[str, int]
    average_notes_per_property: float
    most_used_tags: list[TagCount]
    recent_activity: list[DailyActivity]


class CommenterCount(BaseModel):
    user_id: str
    comment_count: int


class EngagementMetrics(BaseModel):
    total_likes: int
    total_dislikes: int
    average_likes_per_comment: float


class CommentsAnalytics(BaseModel):
    total_comments: int
    approved_comments: int
    pending_comments: int
    moderated_comments: int
    average_comments_per_property: float
    top_commenters: list[CommenterCount]
    engagement_metrics: EngagementMetrics
