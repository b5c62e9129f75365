"""In-memory saved search store keyed by user."""

from typing import Optional

from src.models.saved_search import SavedSearch, SavedSearchCreate, SavedSearchUpdate
from src.utils.errors import InvalidRequestError, NotFoundError
from src.utils.ids import new_id, utc_now
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)


class SavedSearchStore:
    """Saved searches per user, held in process memory."""

    def __init__(self):
        self._searches: dict[str, list[SavedSearch]] = {}

    def clear(self) -> None:
        self._searches.clear()

    def _find(self, user_id: str, search_id: str) -> tuple[list[SavedSearch], int]:
        searches = self._searches.get(user_id, [])
        for index, search in enumerate(searches):
            if search.id == search_id:
                return searches, index
        raise NotFoundError("Saved search not found", code="SAVED_SEARCH_NOT_FOUND")

    async def list_searches(self, user_id: str) -> list[SavedSearch]:
        """Newest first."""
        searches = self._searches.get(user_id, [])
        return sorted(searches, key=lambda s: s.created_at, reverse=True)

    async def create_search(self, user_id: str, payload: SavedSearchCreate) -> SavedSearch:
        if not payload.name or payload.criteria is None:
            raise InvalidRequestError("Name and criteria are required")

        search = SavedSearch(
            id=new_id(),
            name=payload.name,
            criteria=payload.criteria,
            notifications=payload.notifications,
            created_at=utc_now(),
        )
        self._searches.setdefault(user_id, []).append(search)

        logger.info("Saved search created", user_id=mask_user_id(user_id), saved_search_id=search.id)
        return search

    async def update_search(self, user_id: str, search_id: str, updates: SavedSearchUpdate) -> SavedSearch:
        searches, index = self._find(user_id, search_id)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)

        updated = searches[index].model_copy(update={**changes, "updated_at": utc_now()})
        searches[index] = updated

        logger.info("Saved search updated", saved_search_id=search_id, fields=sorted(changes))
        return updated

    async def delete_search(self, user_id: str, search_id: str) -> bool:
        searches, index = self._find(user_id, search_id)
        del searches[index]
        logger.info("Saved search deleted", saved_search_id=search_id)
        return True


_store: Optional[SavedSearchStore] = None


def get_saved_search_store() -> SavedSearchStore:
    """Get the process-wide saved search store."""
    global _store
    if _store is None:
        _store = SavedSearchStore()
    return _store
