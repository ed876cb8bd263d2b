"""
Data models for the Blog Hub application.

Blogs come from static configuration. Everything else is produced by the
Gemini API and validated with pydantic before it enters application state.
"""

import re
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing_extensions import TypedDict


class Blog(TypedDict):
    """Type definition for a configured blog."""

    name: str
    description: str
    url: str


def blog_slug(name: str) -> str:
    """Blog name with each whitespace run replaced by '-', used in article ids."""
    return re.sub(r"\s+", "-", name)


class ArticleDraft(BaseModel):
    """An article as returned by the model, before an id is assigned."""

    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    link: str
    date: str


class Article(ArticleDraft):
    """An article shown in the hub. Ids are unique within a session."""

    id: str
    source: str


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    link: str
    date: str
    source: str  # usually 'Eventbrite' or 'Meetup'


class RedditPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    link: str
    subreddit: str
    author: str


class GoogleAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    link: str
    source: str


class ActivityResults(BaseModel):
    """One activity query's full result set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    events: List[Event]
    reddit_posts: List[RedditPost] = Field(alias="redditPosts")
    google_alerts: List[GoogleAlert] = Field(alias="googleAlerts")

    def is_empty(self) -> bool:
        """True when all three lists are empty."""
        return not (self.events or self.reddit_posts or self.google_alerts)


ArticlesByBlog = Dict[str, List[ArticleDraft]]

ARTICLES_BY_BLOG = TypeAdapter(ArticlesByBlog)
