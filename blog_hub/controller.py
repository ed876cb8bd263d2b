"""
Root controller for the Blog Hub.

Owns the per-session state, wires keyword submissions to the query service and
turns model drafts into Articles with session-unique ids.
"""

import logging
import time
from typing import Callable, Dict, List, Optional

from blog_hub.errors import RequestError, ResponseFormatError
from blog_hub.models import ActivityResults, Article, ArticlesByBlog, Blog, blog_slug
from blog_hub.services.base import QueryService
from blog_hub import state
from blog_hub.state import SavedArticles, SearchState, Status, Tab

logger = logging.getLogger(__name__)

ARTICLES_FAILED_MESSAGE = (
    "Failed to fetch articles. The AI might be busy. Please try again."
)
ACTIVITIES_FAILED_MESSAGE = (
    "Failed to find activities. The AI might be having a moment. Please try again."
)

ArticleMap = Dict[str, List[Article]]


def assign_ids(result: ArticlesByBlog, now_ms: int) -> ArticleMap:
    """Attaches an id and source to every draft, keeping the response order.

    Ids are scoped by blog name and position, so duplicate titles from the
    model still get distinct ids. Blog names that share a slug get the
    blog's position in the reply appended.
    """
    articles: ArticleMap = {}
    used_slugs = set()
    for blog_index, (blog_name, drafts) in enumerate(result.items()):
        slug = blog_slug(blog_name)
        while slug in used_slugs:
            slug = f"{slug}-{blog_index}"
        used_slugs.add(slug)
        articles[blog_name] = [
            Article(
                **draft.model_dump(),
                id=f"{slug}-{index}-{now_ms}",
                source=blog_name,
            )
            for index, draft in enumerate(drafts)
        ]
    return articles


class BlogHubController:
    """Top-level state for one browser session."""

    def __init__(
        self,
        service: QueryService,
        blogs: List[Blog],
        clock: Callable[[], float] = time.time,
    ):
        self.service = service
        self.blogs = blogs
        self.clock = clock
        self.articles: SearchState[ArticleMap] = SearchState()
        self.activities: SearchState[ActivityResults] = SearchState()
        self.saved = SavedArticles()
        self.active_tab = Tab.BLOG

    def select_tab(self, tab: Tab) -> None:
        self.active_tab = tab

    def search_articles(
        self,
        keywords: str,
        on_loading: Optional[Callable[[SearchState[ArticleMap]], None]] = None,
    ) -> SearchState[ArticleMap]:
        """Runs a category query and returns the resulting state.

        on_loading is called once the state has entered LOADING, before the
        request is sent, so the caller can paint placeholders.
        """
        self.articles = state.submit(self.articles, keywords)
        if self.articles.status is not Status.LOADING:
            return self.articles

        request_id = self.articles.request_id
        if on_loading:
            on_loading(self.articles)

        try:
            result = self.service.fetch_category_articles(self.blogs, keywords)
        except (RequestError, ResponseFormatError) as e:
            logger.error("Article search failed: %s", e)
            self.articles = state.reject(
                self.articles, request_id, ARTICLES_FAILED_MESSAGE
            )
            return self.articles

        articles = assign_ids(result, int(self.clock() * 1000))
        self.articles = state.resolve(self.articles, request_id, articles)
        return self.articles

    def search_activities(
        self,
        keywords: str,
        on_loading: Optional[Callable[[SearchState[ActivityResults]], None]] = None,
    ) -> SearchState[ActivityResults]:
        """Runs an activity query and returns the resulting state."""
        self.activities = state.submit(self.activities, keywords)
        if self.activities.status is not Status.LOADING:
            return self.activities

        request_id = self.activities.request_id
        if on_loading:
            on_loading(self.activities)

        try:
            result = self.service.fetch_obscure_activities(keywords)
        except (RequestError, ResponseFormatError) as e:
            logger.error("Activity search failed: %s", e)
            self.activities = state.reject(
                self.activities, request_id, ACTIVITIES_FAILED_MESSAGE
            )
            return self.activities

        self.activities = state.resolve(self.activities, request_id, result)
        return self.activities

    def save(self, article: Article) -> None:
        self.saved.save(article)

    def unsave(self, article_id: str) -> None:
        self.saved.unsave(article_id)

    def is_saved(self, article_id: str) -> bool:
        return article_id in self.saved
