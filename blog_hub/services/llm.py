"""
LLM Service Module.

This module provides the LLMService class, which interfaces with the Google Gemini API
to generate local blog articles and obscure activities for a city. Each call sends a
prompt together with a structured output schema and validates the JSON reply against
the matching pydantic model before handing it back.
"""

import datetime
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError as SchemaValidationError

from blog_hub.config import Settings
from blog_hub.errors import RequestError, ResponseFormatError
from blog_hub.models import ARTICLES_BY_BLOG, ActivityResults, ArticlesByBlog, Blog

logger = logging.getLogger(__name__)


def _string(description: str) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


def _object(properties: Dict[str, types.Schema]) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT, properties=properties, required=list(properties)
    )


ARTICLE_SCHEMA = _object(
    {
        "title": _string("A compelling, SEO-friendly title for the blog post."),
        "summary": _string(
            "A concise, engaging summary of the article content, around 2-3 sentences."
        ),
        "link": _string(
            "A plausible, full URL for the article on the blog's website. Should look realistic."
        ),
        "date": _string(
            "A plausible recent date for the article, in 'Month Day, Year' format "
            "(e.g., 'October 28, 2023')."
        ),
    }
)


def build_category_schema(blogs: List[Blog], per_blog: int = 2) -> types.Schema:
    """Builds an object schema with one article array per blog name."""
    properties = {
        blog["name"]: types.Schema(
            type=types.Type.ARRAY,
            description=(
                f"An array of exactly {per_blog} recent blog posts from {blog['name']} "
                "that are highly relevant to the user's keywords."
            ),
            items=ARTICLE_SCHEMA,
        )
        for blog in blogs
    }
    return types.Schema(type=types.Type.OBJECT, properties=properties)


def build_activity_schema(settings: Settings) -> types.Schema:
    """Builds the three-array schema for activity queries."""
    events = _object(
        {
            "title": _string("The catchy title of the event."),
            "summary": _string("A short, engaging summary of the event."),
            "link": _string("A plausible URL for the event page."),
            "date": _string("A plausible date and time for the event."),
            "source": _string("The source platform, either 'Eventbrite' or 'Meetup'."),
        }
    )
    reddit_posts = _object(
        {
            "title": _string("The title of the Reddit post."),
            "summary": _string(
                "A brief summary of the post's content or top comment."
            ),
            "link": _string("A plausible URL for the Reddit post."),
            "subreddit": _string(f"The subreddit, likely '{settings.subreddit}'."),
            "author": _string(
                "A plausible Reddit username for the author (e.g., u/username)."
            ),
        }
    )
    google_alerts = _object(
        {
            "title": _string("The title of the article or blog post found."),
            "summary": _string("A snippet of text from the article."),
            "link": _string("A plausible URL for the article."),
            "source": _string("The name of the source website or blog."),
        }
    )
    return _object(
        {
            "events": types.Schema(
                type=types.Type.ARRAY,
                description="A list of 3 fictional but highly plausible events from Eventbrite or Meetup.",
                items=events,
            ),
            "redditPosts": types.Schema(
                type=types.Type.ARRAY,
                description=f"A list of 2 fictional but highly plausible Reddit posts from {settings.subreddit}.",
                items=reddit_posts,
            ),
            "googleAlerts": types.Schema(
                type=types.Type.ARRAY,
                description="A list of 2 fictional 'Google Alert' style results from obscure local blogs.",
                items=google_alerts,
            ),
        }
    )


def format_date(day: datetime.date) -> str:
    """Formats a date as 'Month Day, Year', e.g. 'October 19, 2026'."""
    return f"{day:%B} {day.day}, {day.year}"


class LLMService:
    """
    Service for interacting with the Google Gemini API.

    This class handles the initialization of the Gemini client and provides one method
    per query type. Neither method retries, caches or deduplicates.
    """

    _CATEGORY_PROMPT = """
        You are a sophisticated blog scraping bot for {city}.
        Your task is to find the {per_blog} most recent and relevant articles, posts, or events from a specific list of {city_name} blogs that match the user's keywords.
        The current date is {current_date}. All generated articles must have a plausible publication date within the last 7 days.

        User Keywords: "{keywords}"

        Target Blogs:
        {blog_descriptions}

        Instructions:
        1. For EACH of the blogs listed above, generate exactly {per_blog} plausible post summaries that are highly relevant to the user's keywords.
        2. The posts must sound like they were published within the last week.
        3. Create a realistic title, a concise summary, a plausible URL, and a recent date for each post (e.g., 'October 28, 2023'). The date MUST be within the last 7 days from today's date ({current_date}).
        4. Your entire output must be a single JSON object that strictly adheres to the provided schema. Do not include any other text or explanations.
        """

    _ACTIVITY_PROMPT = """
        You are a "digital sleuth" specializing in finding unique, obscure, and underground activities in {city}.
        Your task is to generate a list of plausible-sounding events, Reddit discussions, and web findings based on user-provided keywords.
        The current date is {current_date}. Use this for context.

        User's Search Keywords: "{keywords}"
        Initial Seed Keywords to Inspire You: {seed_keywords}

        Instructions:
        1.  **Eventbrite & Meetup:** Generate a list of 3 fictional but highly plausible events. **Crucially, all events MUST take place in the future, within the next 30 days from today's date ({current_date}).** They should sound like pop-ups, secret shows, or niche gatherings. Include a realistic title, a future date/time, a short engaging summary, a source (either 'Eventbrite' or 'Meetup'), and a plausible link.
        2.  **Reddit Scrape:** Generate a list of 2 fictional but highly plausible Reddit posts from {subreddit}. These posts should be recent, appearing to be from the last month, discussing upcoming or recent unique activities. Include a catchy post title, a summary of the discussion, a plausible author username, and a link to the post.
        3.  **Google Alerts:** Generate a list of 2 fictional "Google Alert" style results from obscure blogs. These articles should be recently published, within the last month, announcing or discussing unique local happenings. Include a title, a brief snippet/summary, the source website name, and a link.

        Your entire output must be a single JSON object that strictly adheres to the provided schema. Do not include any other text or explanations.
        """

    def __init__(
        self,
        api_key: str,
        settings: Settings,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.settings = settings
        self.today = today
        self.client: Optional[genai.Client] = None
        try:
            self.client = genai.Client(api_key=api_key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Failed to initialize Gemini client: %s", e)
            self.client = None

    def _parse_json_response(self, text: str) -> Any:
        """Parses JSON from LLM output, handling markdown blocks."""
        cleaned = text.strip()
        # Strip Markdown code blocks usually returned by Gemini
        if cleaned.startswith("```"):
            cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
            if cleaned.endswith("```"):
                cleaned = cleaned[:-3]
            cleaned = cleaned.strip()

        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ResponseFormatError(f"Gemini reply is not valid JSON: {e}") from e

    def get_category_prompt(self, blogs: List[Blog], keywords: str) -> str:
        """Returns the prompt for a category query."""
        blog_descriptions = "\n".join(
            f"- {blog['name']}: {blog['description']}" for blog in blogs
        )
        return self._CATEGORY_PROMPT.format(
            city=self.settings.city,
            city_name=self.settings.city_name,
            per_blog=self.settings.articles_per_blog,
            current_date=format_date(self.today()),
            keywords=keywords,
            blog_descriptions=blog_descriptions,
        )

    def get_activity_prompt(self, keywords: str) -> str:
        """Returns the prompt for an activity query."""
        return self._ACTIVITY_PROMPT.format(
            city=self.settings.city,
            current_date=format_date(self.today()),
            keywords=keywords,
            seed_keywords=", ".join(f'"{k}"' for k in self.settings.seed_keywords),
            subreddit=self.settings.subreddit,
        )

    def _generate(self, prompt: str, schema: types.Schema, temperature: float) -> Any:
        """Sends one request and returns the decoded JSON reply."""
        if not self.client:
            raise RequestError("Gemini client not initialized.")

        try:
            response = self.client.models.generate_content(
                model=self.settings.model,
                contents=prompt,
                config={
                    "response_mime_type": "application/json",
                    "response_schema": schema,
                    "temperature": temperature,
                },
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Gemini API error: %s", e)
            raise RequestError(f"Gemini API call failed: {e}") from e

        response_text = response.text if response.text else ""
        if not response_text.strip():
            raise ResponseFormatError("Gemini returned an empty reply.")
        return self._parse_json_response(response_text)

    def fetch_category_articles(
        self, blogs: List[Blog], keywords: str
    ) -> ArticlesByBlog:
        """Asks Gemini for recent articles from each blog matching the keywords."""
        logger.info(
            "Asking Gemini for articles from %d blogs (keywords=%r)...",
            len(blogs),
            keywords,
        )
        prompt = self.get_category_prompt(blogs, keywords)
        schema = build_category_schema(blogs, self.settings.articles_per_blog)
        payload = self._generate(prompt, schema, self.settings.article_temperature)

        if not isinstance(payload, dict):
            logger.error("Gemini reply is not an object: %s", type(payload).__name__)
            raise ResponseFormatError("Invalid JSON response from API.")
        try:
            result = ARTICLES_BY_BLOG.validate_python(payload)
        except SchemaValidationError as e:
            logger.error("Failed to parse Gemini response: %s", e)
            raise ResponseFormatError(f"Article reply failed validation: {e}") from e

        logger.info(
            "Received %d articles across %d blogs.",
            sum(len(items) for items in result.values()),
            len(result),
        )
        return result

    def fetch_obscure_activities(self, keywords: str) -> ActivityResults:
        """Asks Gemini for events, Reddit posts and web alerts matching the keywords."""
        logger.info("Asking Gemini for obscure activities (keywords=%r)...", keywords)
        prompt = self.get_activity_prompt(keywords)
        schema = build_activity_schema(self.settings)
        payload = self._generate(prompt, schema, self.settings.activity_temperature)

        if not isinstance(payload, dict):
            logger.error("Gemini reply is not an object: %s", type(payload).__name__)
            raise ResponseFormatError("Invalid JSON response from API.")
        try:
            result = ActivityResults.model_validate(payload)
        except SchemaValidationError as e:
            logger.error("Failed to parse Gemini response: %s", e)
            raise ResponseFormatError(f"Activity reply failed validation: {e}") from e

        logger.info(
            "Received %d events, %d posts, %d alerts.",
            len(result.events),
            len(result.reddit_posts),
            len(result.google_alerts),
        )
        return result
