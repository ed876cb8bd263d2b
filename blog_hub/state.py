"""
Application state for the Blog Hub.

Each search surface (blog hub, activity finder) owns a SearchState that only
changes through the transition functions below. The saved list and the active
tab are kept separately and never affect a search.
"""

import dataclasses
import enum
import logging
from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from blog_hub.errors import ValidationError
from blog_hub.models import Article

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_KEYWORDS_MESSAGE = "Please enter keywords to search."


class Status(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class Tab(enum.Enum):
    BLOG = "blog"
    ACTIVITY = "activity"


@dataclasses.dataclass(frozen=True)
class SearchState(Generic[T]):
    """Snapshot of one search surface."""

    status: Status = Status.IDLE
    results: Optional[T] = None
    error: Optional[str] = None
    initial_load: bool = True
    request_id: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status is Status.LOADING


def validate_keywords(keywords: str) -> str:
    """Returns the keywords, or raises ValidationError when they are blank."""
    if not keywords.strip():
        raise ValidationError(EMPTY_KEYWORDS_MESSAGE)
    return keywords


def submit(state: SearchState[T], keywords: str) -> SearchState[T]:
    """Starts a search, or records a validation error for blank keywords.

    A validation error leaves results and initial_load as they were. Callers
    must check the returned status before issuing a request.
    """
    try:
        validate_keywords(keywords)
    except ValidationError as e:
        return dataclasses.replace(state, status=Status.ERROR, error=str(e))
    return dataclasses.replace(
        state,
        status=Status.LOADING,
        error=None,
        initial_load=False,
        request_id=state.request_id + 1,
    )


def resolve(state: SearchState[T], request_id: int, results: T) -> SearchState[T]:
    """Stores results for the current request. Stale responses are dropped."""
    if request_id != state.request_id:
        logger.info(
            "Ignoring stale response %d (current request %d).",
            request_id,
            state.request_id,
        )
        return state
    return dataclasses.replace(
        state, status=Status.LOADED, results=results, error=None
    )


def reject(state: SearchState[T], request_id: int, message: str) -> SearchState[T]:
    """Records a failed request. Previous results are kept."""
    if request_id != state.request_id:
        logger.info(
            "Ignoring stale failure %d (current request %d).",
            request_id,
            state.request_id,
        )
        return state
    return dataclasses.replace(state, status=Status.ERROR, error=message)


class SavedArticles:
    """Ordered set of bookmarked articles, unique by id."""

    def __init__(self) -> None:
        self._items: Dict[str, Article] = {}

    def save(self, article: Article) -> None:
        """Appends the article unless one with the same id is already saved."""
        if article.id in self._items:
            return
        self._items[article.id] = article
        logger.debug("Saved article %s", article.id)

    def unsave(self, article_id: str) -> None:
        """Removes the article with this id, if present."""
        self._items.pop(article_id, None)

    def ids(self) -> List[str]:
        return list(self._items)

    def __contains__(self, article_id: object) -> bool:
        return article_id in self._items

    def __iter__(self) -> Iterator[Article]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)
