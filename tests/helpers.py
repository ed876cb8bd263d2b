"""Shared fixtures for the Blog Hub tests."""

import json
from unittest.mock import MagicMock

from blog_hub.config import DEFAULT_BLOGS


def article_payload(blogs=None, per_blog=2, title="Story"):
    """A well-formed category reply with per_blog items for each blog."""
    blogs = DEFAULT_BLOGS if blogs is None else blogs
    return {
        blog["name"]: [
            {
                "title": title,
                "summary": f"Summary {i}",
                "link": f"https://example.com/{i}",
                "date": "October 15, 2026",
            }
            for i in range(per_blog)
        ]
        for blog in blogs
    }


def activity_payload(events=3, posts=2, alerts=2):
    return {
        "events": [
            {
                "title": f"Secret Show {i}",
                "summary": "Bring a flashlight.",
                "link": f"https://eventbrite.com/e/{i}",
                "date": "November 1, 2026 8:00 PM",
                "source": "Eventbrite",
            }
            for i in range(events)
        ],
        "redditPosts": [
            {
                "title": f"Weird thing downtown {i}",
                "summary": "Anyone else see this?",
                "link": f"https://reddit.com/r/nashville/{i}",
                "subreddit": "r/nashville",
                "author": f"u/local{i}",
            }
            for i in range(posts)
        ],
        "googleAlerts": [
            {
                "title": f"Pop-up gallery {i}",
                "summary": "A hidden gallery opens.",
                "link": f"https://smallblog.com/{i}",
                "source": "Small Blog",
            }
            for i in range(alerts)
        ],
    }


def gemini_response(payload):
    """A fake generate_content response carrying payload as JSON text."""
    response = MagicMock()
    response.text = payload if isinstance(payload, str) else json.dumps(payload)
    return response
