"""
Configuration loading for the Blog Hub.

Static settings (city, blogs, model parameters) live in config.json next to
this module. The Gemini API key is only ever read from the environment.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from blog_hub.errors import MissingCredentialError
from blog_hub.models import Blog, blog_slug

logger = logging.getLogger(__name__)

API_KEY_ENV = "GEMINI_KEY"

DEFAULT_BLOGS: List[Blog] = [
    {
        "name": "Eater Nashville",
        "description": "The go-to source for news, reviews, and guides on Nashville's vibrant dining scene.",
        "url": "https://nashville.eater.com/",
    },
    {
        "name": "StyleBlueprint Nashville",
        "description": "A digital lifestyle publication for savvy women, covering fashion, food, travel, and local events.",
        "url": "https://styleblueprint.com/nashville/",
    },
    {
        "name": "Nashville Lifestyles",
        "description": "The premier city magazine for the Nashville area, highlighting the best in local culture, food, and events.",
        "url": "https://www.nashvillelifestyles.com/",
    },
    {
        "name": "I Believe in Nashville",
        "description": "A blog dedicated to promoting local businesses, artists, and the unique spirit of Nashville.",
        "url": "https://ibelieveinnashville.com/",
    },
]


class Settings(BaseModel):
    """Validated application settings."""

    model_config = ConfigDict(frozen=True)

    city: str = "Nashville, Tennessee"
    subreddit: str = "r/nashville"
    model: str = "gemini-2.5-flash"
    article_temperature: float = 0.7
    activity_temperature: float = 0.8
    articles_per_blog: int = 2
    seed_keywords: List[str] = [
        "Nashville pop-up",
        "secret show Nashville",
        "hidden Nashville",
        "underground",
        "secret",
        "weird",
    ]
    blogs: List[Blog] = DEFAULT_BLOGS

    @field_validator("blogs")
    @classmethod
    def blog_slugs_must_be_unique(cls, v: List[Blog]) -> List[Blog]:
        seen: Dict[str, str] = {}
        for blog in v:
            slug = blog_slug(blog["name"])
            if slug in seen:
                raise ValueError(
                    f"Blogs {seen[slug]!r} and {blog['name']!r} map to the same id prefix {slug!r}"
                )
            seen[slug] = blog["name"]
        return v

    @property
    def city_name(self) -> str:
        """City without the state, e.g. 'Nashville'."""
        return self.city.split(",")[0].strip()


def load_config(config_filename: str = "config.json") -> Settings:
    """Loads settings from a JSON file next to this module."""
    base_dir = os.path.dirname(os.path.abspath(__file__))
    config_path = os.path.join(base_dir, config_filename)

    raw: Dict[str, Any]
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.warning("Config file not found at %s. Using defaults.", config_path)
        raw = {}

    return Settings.model_validate(raw)


def get_api_key(environ: Optional[Dict[str, str]] = None) -> str:
    """Returns the Gemini API key or raises if it is not set."""
    env = os.environ if environ is None else environ
    api_key = env.get(API_KEY_ENV)
    if not api_key:
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable is not set.")
    return api_key
