"""Property notes and comments service backed by an in-process store."""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional

from src.models.note import (
    CommentEdit,
    CommenterCount,
    CommentMetadata,
    CommentsAnalytics,
    CommentsFilter,
    CreateCommentRequest,
    CreateNoteRequest,
    DailyActivity,
    EngagementMetrics,
    NoteMetadata,
    NotePriority,
    NotesAnalytics,
    NotesFilter,
    NoteType,
    PropertyComment,
    PropertyNote,
    TagCount,
    UpdateCommentRequest,
    UpdateNoteRequest,
)
from src.utils.config import AppConfig
from src.utils.errors import NotFoundError
from src.utils.ids import as_utc, new_id, utc_now
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

ANALYTICS_TOP_N = 10
RECENT_ACTIVITY_DAYS = 7


def count_words(text: str) -> int:
    return len(text.split())


def _in_range(moment: datetime, date_from: Optional[datetime], date_to: Optional[datetime]) -> bool:
    if date_from and moment < as_utc(date_from):
        return False
    if date_to and moment > as_utc(date_to):
        return False
    return True


def _seed_notes() -> list[PropertyNote]:
    def day(d: int) -> datetime:
        return datetime(2024, 1, d, tzinfo=timezone.utc)

    return [
        PropertyNote(
            id="note-1",
            property_id="property-1",
            user_id="user-1",
            title="First viewing notes",
            content="Great location, but needs some renovation. The kitchen is outdated but has potential.",
            type=NoteType.VIEWING,
            tags=["viewing", "kitchen", "renovation"],
            is_private=True,
            created_at=day(15),
            updated_at=day(15),
            metadata=NoteMetadata(word_count=13, priority=NotePriority.MEDIUM),
        ),
        PropertyNote(
            id="note-2",
            property_id="property-1",
            user_id="user-1",
            title="Financial analysis",
            content="Price seems reasonable for the area. Comparable properties are selling for $50k more.",
            type=NoteType.FINANCIAL,
            tags=["price", "comparison", "value"],
            is_private=True,
            created_at=day(16),
            updated_at=day(16),
            metadata=NoteMetadata(word_count=13, priority=NotePriority.HIGH, is_pinned=True),
        ),
        PropertyNote(
            id="note-3",
            property_id="property-2",
            user_id="user-2",
            title="Market research",
            content="This neighborhood is trending up. New developments nearby will increase property values.",
            type=NoteType.MARKET,
            tags=["market", "trends", "development"],
            is_private=False,
            created_at=day(17),
            updated_at=day(17),
            metadata=NoteMetadata(word_count=12, priority=NotePriority.MEDIUM),
        ),
    ]


def _seed_comments() -> list[PropertyComment]:
    def day(d: int, hour: int = 0) -> datetime:
        return datetime(2024, 1, d, hour, tzinfo=timezone.utc)

    return [
        PropertyComment(
            id="comment-1",
            property_id="property-1",
            user_id="user-2",
            content="I viewed this property last week. The location is amazing!",
            is_approved=True,
            likes=5,
            created_at=day(15),
            updated_at=day(15),
            metadata=CommentMetadata(word_count=10),
        ),
        PropertyComment(
            id="comment-2",
            property_id="property-1",
            user_id="user-3",
            parent_id="comment-1",
            content="I agree! The neighborhood is really nice.",
            is_approved=True,
            likes=2,
            created_at=day(15, 6),
            updated_at=day(15, 6),
            metadata=CommentMetadata(word_count=7),
        ),
        PropertyComment(
            id="comment-3",
            property_id="property-2",
            user_id="user-1",
            content="Has anyone had issues with the HOA here?",
            created_at=day(16),
            updated_at=day(16),
            metadata=CommentMetadata(word_count=8),
        ),
    ]


def build_comment_tree(comments: list[PropertyComment]) -> list[PropertyComment]:
    """Nest replies under their parents, oldest first at every level.

    Comments whose parent is not in the given list are treated as roots.
    """
    known_ids = {comment.id for comment in comments}
    children: dict[Optional[str], list[PropertyComment]] = {}
    for comment in comments:
        parent = comment.parent_id if comment.parent_id in known_ids else None
        children.setdefault(parent, []).append(comment)

    def attach(parent_id: Optional[str]) -> list[PropertyComment]:
        nodes = sorted(children.get(parent_id, []), key=lambda c: c.created_at)
        return [node.model_copy(update={"replies": attach(node.id)}) for node in nodes]

    return attach(None)


class NotesService:
    """CRUD, search and analytics over property notes and comments."""

    def __init__(self, seed: bool = True):
        self.notes: list[PropertyNote] = _seed_notes() if seed else []
        self.comments: list[PropertyComment] = _seed_comments() if seed else []

    # Notes

    def _note_index(self, note_id: str) -> int:
        for index, note in enumerate(self.notes):
            if note.id == note_id:
                return index
        raise NotFoundError("Note not found", code="NOTE_NOT_FOUND")

    async def create_note(
        self, request: CreateNoteRequest, user_id: str = AppConfig.CURRENT_USER_ID
    ) -> PropertyNote:
        now = utc_now()
        note = PropertyNote(
            id=new_id("note"),
            property_id=request.property_id,
            user_id=user_id,
            title=request.title,
            content=request.content,
            type=request.type,
            tags=request.tags,
            attachments=request.attachments,
            is_private=request.is_private,
            created_at=now,
            updated_at=now,
            metadata=NoteMetadata(
                word_count=count_words(request.content),
                priority=request.priority or NotePriority.MEDIUM,
                is_pinned=False,
                location=request.location,
                viewing_date=request.viewing_date,
                price=request.price,
                rating=request.rating,
            ),
        )
        self.notes.append(note)
        logger.info("Note created", note_id=note.id, property_id=note.property_id, note_type=note.type.value)
        return note

    async def get_note(self, note_id: str) -> PropertyNote:
        return self.notes[self._note_index(note_id)]

    async def update_note(self, note_id: str, request: UpdateNoteRequest) -> PropertyNote:
        index = self._note_index(note_id)
        existing = self.notes[index]
        changes = request.model_dump(exclude_unset=True, exclude_none=True)

        metadata_changes = {}
        if "priority" in changes:
            metadata_changes["priority"] = changes.pop("priority")
        if "is_pinned" in changes:
            metadata_changes["is_pinned"] = changes.pop("is_pinned")
        if "content" in changes:
            metadata_changes["word_count"] = count_words(changes["content"])

        updated = existing.model_copy(update={
            **changes,
            "updated_at": utc_now(),
            "metadata": existing.metadata.model_copy(update=metadata_changes),
        })
        self.notes[index] = updated
        logger.info("Note updated", note_id=note_id, fields=sorted(changes) + sorted(metadata_changes))
        return updated

    async def delete_note(self, note_id: str) -> None:
        index = self._note_index(note_id)
        del self.notes[index]
        logger.info("Note deleted", note_id=note_id)

    def _filter_notes(self, notes: list[PropertyNote], filters: Optional[NotesFilter]) -> list[PropertyNote]:
        if filters is None:
            return notes

        def matches(note: PropertyNote) -> bool:
            if filters.user_id and note.user_id != filters.user_id:
                return False
            if filters.type and note.type != filters.type:
                return False
            if filters.is_private is not None and note.is_private != filters.is_private:
                return False
            if filters.priority and note.metadata.priority != filters.priority:
                return False
            if filters.tags and not any(tag in note.tags for tag in filters.tags):
                return False
            return _in_range(note.created_at, filters.date_from, filters.date_to)

        return [note for note in notes if matches(note)]

    async def get_notes_by_property(
        self, property_id: str, filters: Optional[NotesFilter] = None
    ) -> list[PropertyNote]:
        """Notes for a property, newest first."""
        notes = [note for note in self.notes if note.property_id == property_id]
        notes = self._filter_notes(notes, filters)
        return sorted(notes, key=lambda n: n.created_at, reverse=True)

    async def search_notes(self, query: str, filters: Optional[NotesFilter] = None) -> list[PropertyNote]:
        """Case-insensitive match on title, content or any tag."""
        needle = query.lower()
        notes = [
            note for note in self.notes
            if needle in note.title.lower()
            or needle in note.content.lower()
            or any(needle in tag.lower() for tag in note.tags)
        ]
        notes = self._filter_notes(notes, filters)
        return sorted(notes, key=lambda n: n.created_at, reverse=True)

    # Comments

    def _comment_index(self, comment_id: str) -> int:
        for index, comment in enumerate(self.comments):
            if comment.id == comment_id:
                return index
        raise NotFoundError("Comment not found", code="COMMENT_NOT_FOUND")

    def _replace_comment(self, comment_id: str, **changes) -> PropertyComment:
        index = self._comment_index(comment_id)
        updated = self.comments[index].model_copy(update={**changes, "updated_at": utc_now()})
        self.comments[index] = updated
        return updated

    async def create_comment(
        self, request: CreateCommentRequest, user_id: str = AppConfig.CURRENT_USER_ID
    ) -> PropertyComment:
        if request.parent_id:
            self._comment_index(request.parent_id)

        now = utc_now()
        comment = PropertyComment(
            id=new_id("comment"),
            property_id=request.property_id,
            user_id=user_id,
            content=request.content,
            parent_id=request.parent_id,
            created_at=now,
            updated_at=now,
            metadata=CommentMetadata(word_count=count_words(request.content)),
        )
        self.comments.append(comment)
        logger.info("Comment created", comment_id=comment.id, property_id=comment.property_id,
                    is_reply=comment.parent_id is not None)
        return comment

    async def get_comment(self, comment_id: str) -> PropertyComment:
        return self.comments[self._comment_index(comment_id)]

    async def update_comment(self, comment_id: str, request: UpdateCommentRequest) -> PropertyComment:
        existing = self.comments[self._comment_index(comment_id)]
        now = utc_now()
        edit = CommentEdit(id=new_id("edit"), content=existing.content, edited_at=now)
        metadata = existing.metadata.model_copy(update={
            "word_count": count_words(request.content),
            "is_edited": True,
            "edit_history": [*existing.metadata.edit_history, edit],
        })
        return self._replace_comment(comment_id, content=request.content, metadata=metadata)

    async def delete_comment(self, comment_id: str) -> None:
        index = self._comment_index(comment_id)
        del self.comments[index]
        logger.info("Comment deleted", comment_id=comment_id)

    async def get_comments_by_property(
        self, property_id: str, filters: Optional[CommentsFilter] = None
    ) -> list[PropertyComment]:
        """Threaded comments for a property."""
        comments = [comment for comment in self.comments if comment.property_id == property_id]

        if filters is not None:
            def matches(comment: PropertyComment) -> bool:
                if filters.user_id and comment.user_id != filters.user_id:
                    return False
                if filters.parent_id and comment.parent_id != filters.parent_id:
                    return False
                if filters.is_approved is not None and comment.is_approved != filters.is_approved:
                    return False
                if filters.is_moderated is not None and comment.is_moderated != filters.is_moderated:
                    return False
                return _in_range(comment.created_at, filters.date_from, filters.date_to)

            comments = [comment for comment in comments if matches(comment)]

        return build_comment_tree(comments)

    async def approve_comment(self, comment_id: str) -> PropertyComment:
        logger.info("Comment approved", comment_id=comment_id)
        return self._replace_comment(comment_id, is_approved=True)

    async def moderate_comment(self, comment_id: str, reason: str) -> PropertyComment:
        logger.info("Comment moderated", comment_id=comment_id, reason=reason)
        return self._replace_comment(comment_id, is_moderated=True, moderation_reason=reason)

    async def like_comment(self, comment_id: str) -> PropertyComment:
        current = self.comments[self._comment_index(comment_id)]
        return self._replace_comment(comment_id, likes=current.likes + 1)

    async def dislike_comment(self, comment_id: str) -> PropertyComment:
        current = self.comments[self._comment_index(comment_id)]
        return self._replace_comment(comment_id, dislikes=current.dislikes + 1)

    # Analytics

    def _recent_activity(self, notes: list[PropertyNote]) -> list[DailyActivity]:
        today = utc_now().date()
        days = [today - timedelta(days=offset) for offset in range(RECENT_ACTIVITY_DAYS - 1, -1, -1)]
        note_days = Counter(note.created_at.date() for note in notes)
        comment_days = Counter(comment.created_at.date() for comment in self.comments)
        return [
            DailyActivity(
                date=day.isoformat(),
                notes_created=note_days.get(day, 0),
                comments_created=comment_days.get(day, 0),
            )
            for day in days
        ]

    async def get_notes_analytics(self, property_id: Optional[str] = None) -> NotesAnalytics:
        notes = self.notes
        if property_id:
            notes = [note for note in notes if note.property_id == property_id]

        tag_counts = Counter(tag for note in notes for tag in note.tags)
        unique_properties = len({note.property_id for note in notes})

        return NotesAnalytics(
            total_notes=len(notes),
            notes_by_type={t.value: sum(1 for n in notes if n.type == t) for t in NoteType},
            notes_by_priority={
                p.value: sum(1 for n in notes if n.metadata.priority == p) for p in NotePriority
            },
            average_notes_per_property=len(notes) / unique_properties if unique_properties else 0,
            most_used_tags=[
                TagCount(tag=tag, count=count) for tag, count in tag_counts.most_common(ANALYTICS_TOP_N)
            ],
            recent_activity=self._recent_activity(notes),
        )

    async def get_comments_analytics(self, property_id: Optional[str] = None) -> CommentsAnalytics:
        comments = self.comments
        if property_id:
            comments = [comment for comment in comments if comment.property_id == property_id]

        total_likes = sum(comment.likes for comment in comments)
        unique_properties = len({comment.property_id for comment in comments})
        commenters = Counter(comment.user_id for comment in comments)

        return CommentsAnalytics(
            total_comments=len(comments),
            approved_comments=sum(1 for c in comments if c.is_approved),
            pending_comments=sum(1 for c in comments if not c.is_approved),
            moderated_comments=sum(1 for c in comments if c.is_moderated),
            average_comments_per_property=len(comments) / unique_properties if unique_properties else 0,
            top_commenters=[
                CommenterCount(user_id=user_id, comment_count=count)
                for user_id, count in commenters.most_common(ANALYTICS_TOP_N)
            ],
            engagement_metrics=EngagementMetrics(
                total_likes=total_likes,
                total_dislikes=sum(comment.dislikes for comment in comments),
                average_likes_per_comment=total_likes / len(comments) if comments else 0,
            ),
        )


_service: Optional[NotesService] = None


def get_notes_service() -> NotesService:
    """Get the process-wide notes service."""
    global _service
    if _service is None:
        _service = NotesService()
    return _service


def reset_notes_service() -> None:
    """Discard the in-memory store so the next call starts from seed data."""
    global _service
    _service = None
