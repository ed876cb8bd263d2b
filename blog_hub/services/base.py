"""
Base interface for AI query services.

The controller only depends on this contract, so tests can swap in a fake.
"""

from typing import List, Protocol

from blog_hub.models import ActivityResults, ArticlesByBlog, Blog


class QueryService(Protocol):
    """
    Protocol for services that turn keywords into generated content.

    Implementations make exactly one outbound request per call and raise
    RequestError or ResponseFormatError on failure.
    """

    def fetch_category_articles(
        self, blogs: List[Blog], keywords: str
    ) -> ArticlesByBlog:
        """Returns article drafts keyed by blog name."""

    def fetch_obscure_activities(self, keywords: str) -> ActivityResults:
        """Returns events, forum posts and web alerts."""
