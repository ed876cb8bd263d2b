"""Unit tests for the root controller, including end-to-end page rendering."""

import datetime
import unittest
from unittest.mock import MagicMock, patch

from blog_hub.config import DEFAULT_BLOGS, Settings
from blog_hub.controller import (
    ACTIVITIES_FAILED_MESSAGE,
    ARTICLES_FAILED_MESSAGE,
    BlogHubController,
    assign_ids,
)
from blog_hub.errors import RequestError, ResponseFormatError
from blog_hub.models import ARTICLES_BY_BLOG, ActivityResults
from blog_hub.services.base import QueryService
from blog_hub.services.llm import LLMService
from blog_hub.services.renderer import PageRenderer
from blog_hub.state import EMPTY_KEYWORDS_MESSAGE, Status, Tab

from helpers import activity_payload, article_payload, gemini_response

NOW = 1_760_000_000.0


def make_controller(service=None):
    service = service or MagicMock(spec=QueryService)
    return BlogHubController(service, DEFAULT_BLOGS, clock=lambda: NOW)


class TestAssignIds(unittest.TestCase):
    def test_ids_distinct_despite_duplicate_titles(self):
        drafts = ARTICLES_BY_BLOG.validate_python(article_payload(title="Same"))

        articles = assign_ids(drafts, 1234)

        ids = [a.id for items in articles.values() for a in items]
        self.assertEqual(len(ids), 8)
        self.assertEqual(len(set(ids)), 8)
        first = articles["Eater Nashville"][0]
        self.assertEqual(first.id, "Eater-Nashville-0-1234")
        self.assertEqual(first.source, "Eater Nashville")
        self.assertEqual(first.title, "Same")

    def test_whitespace_runs_collapse(self):
        drafts = ARTICLES_BY_BLOG.validate_python(
            article_payload(blogs=[{"name": "I  Believe\tin", "description": "", "url": ""}], per_blog=1)
        )
        self.assertEqual(assign_ids(drafts, 5)["I  Believe\tin"][0].id, "I-Believe-in-0-5")

    def test_colliding_slugs_still_get_distinct_ids(self):
        blogs = [
            {"name": "A B", "description": "", "url": ""},
            {"name": "A-B", "description": "", "url": ""},
        ]
        drafts = ARTICLES_BY_BLOG.validate_python(article_payload(blogs=blogs))

        articles = assign_ids(drafts, 7)

        ids = [a.id for items in articles.values() for a in items]
        self.assertEqual(len(set(ids)), 4)
        self.assertEqual(articles["A B"][0].id, "A-B-0-7")
        self.assertEqual(articles["A-B"][0].id, "A-B-1-0-7")


class TestArticleSearch(unittest.TestCase):
    def test_blank_keywords_make_no_call(self):
        controller = make_controller()
        for keywords in ("", "   "):
            state = controller.search_articles(keywords)
            self.assertEqual(state.error, EMPTY_KEYWORDS_MESSAGE)
        controller.service.fetch_category_articles.assert_not_called()

    def test_success_stores_articles_with_ids(self):
        controller = make_controller()
        controller.service.fetch_category_articles.return_value = (
            ARTICLES_BY_BLOG.validate_python(article_payload())
        )
        seen = []

        state = controller.search_articles(
            "live music", on_loading=lambda s: seen.append(s.status)
        )

        self.assertEqual(seen, [Status.LOADING])
        self.assertEqual(state.status, Status.LOADED)
        self.assertIsNone(state.error)
        self.assertEqual(len(state.results), 4)
        controller.service.fetch_category_articles.assert_called_once_with(
            DEFAULT_BLOGS, "live music"
        )

    def test_failure_sets_generic_message_and_keeps_results(self):
        controller = make_controller()
        controller.service.fetch_category_articles.return_value = (
            ARTICLES_BY_BLOG.validate_python(article_payload())
        )
        previous = controller.search_articles("live music").results

        for error in (RequestError("down"), ResponseFormatError("bad")):
            controller.service.fetch_category_articles.side_effect = error
            state = controller.search_articles("tacos")
            self.assertEqual(state.status, Status.ERROR)
            self.assertEqual(state.error, ARTICLES_FAILED_MESSAGE)
            self.assertIs(state.results, previous)

    def test_malformed_reply_commits_nothing(self):
        with patch("blog_hub.services.llm.genai.Client") as mock_client_cls:
            mock_client_cls.return_value.models.generate_content.return_value = (
                gemini_response(["not", "an", "object"])
            )
            controller = make_controller(LLMService("fake_key", Settings()))

            state = controller.search_articles("live music")

        self.assertEqual(state.status, Status.ERROR)
        self.assertIsNone(state.results)
        self.assertEqual(state.error, ARTICLES_FAILED_MESSAGE)


class TestActivitySearch(unittest.TestCase):
    def test_blank_keywords_make_no_call(self):
        controller = make_controller()
        state = controller.search_activities("  ")
        self.assertEqual(state.error, EMPTY_KEYWORDS_MESSAGE)
        controller.service.fetch_obscure_activities.assert_not_called()

    def test_failure_sets_generic_message(self):
        controller = make_controller()
        controller.service.fetch_obscure_activities.side_effect = RequestError("x")
        state = controller.search_activities("weird")
        self.assertEqual(state.error, ACTIVITIES_FAILED_MESSAGE)
        self.assertIsNone(state.results)

    def test_surfaces_are_independent(self):
        controller = make_controller()
        controller.search_activities("")
        self.assertIsNone(controller.articles.error)
        self.assertTrue(controller.articles.initial_load)


class TestSavedAndTabs(unittest.TestCase):
    def setUp(self):
        self.controller = make_controller()
        self.controller.service.fetch_category_articles.return_value = (
            ARTICLES_BY_BLOG.validate_python(article_payload())
        )
        results = self.controller.search_articles("live music").results
        self.article = results["Eater Nashville"][0]

    def test_save_twice_keeps_size(self):
        self.controller.save(self.article)
        self.controller.save(self.article)
        self.assertEqual(len(self.controller.saved), 1)
        self.assertTrue(self.controller.is_saved(self.article.id))

    def test_unsave_absent_is_noop(self):
        self.controller.save(self.article)
        self.controller.unsave("nope")
        self.assertEqual(self.controller.saved.ids(), [self.article.id])
        self.controller.unsave(self.article.id)
        self.assertEqual(len(self.controller.saved), 0)

    def test_tab_defaults_to_blog(self):
        self.assertIs(self.controller.active_tab, Tab.BLOG)
        self.controller.select_tab(Tab.ACTIVITY)
        self.assertIs(self.controller.active_tab, Tab.ACTIVITY)
        self.assertEqual(self.controller.articles.status, Status.LOADED)


class TestEndToEnd(unittest.TestCase):
    """Controller + Gemini service (mocked client) + renderer."""

    def setUp(self):
        patcher = patch("blog_hub.services.llm.genai.Client")
        self.generate = patcher.start().return_value.models.generate_content
        self.addCleanup(patcher.stop)
        service = LLMService(
            "fake_key", Settings(), today=lambda: datetime.date(2026, 10, 19)
        )
        self.controller = make_controller(service)
        self.renderer = PageRenderer("Nashville")

    def test_live_music_shows_four_sections_of_two(self):
        self.generate.return_value = gemini_response(article_payload())
        skeletons = []

        state = self.controller.search_articles(
            "live music",
            on_loading=lambda s: skeletons.append(
                self.renderer.render_blog_section(
                    s.results, DEFAULT_BLOGS, s.is_loading, s.initial_load
                )
            ),
        )
        page = self.renderer.render_blog_section(
            state.results, DEFAULT_BLOGS, state.is_loading, state.initial_load
        )

        self.assertEqual(skeletons[0].count("class='bh-skeleton'"), 8)
        self.assertEqual(page.count('class="bh-section"'), 4)
        self.assertEqual(page.count('class="bh-card"'), 8)
        self.assertNotIn("bh-skeleton", page)
        self.assertEqual(self.renderer.render_error(state.error), "")
        self.assertEqual(self.generate.call_count, 1)

    def test_weird_shows_three_titled_sections(self):
        self.generate.return_value = gemini_response(activity_payload())

        state = self.controller.search_activities("weird")
        page = self.renderer.render_activity_results(
            state.results, state.is_loading, state.initial_load
        )

        self.assertIsInstance(state.results, ActivityResults)
        self.assertEqual(page.count('class="bh-section"'), 3)
        self.assertIn("Events (Eventbrite &amp; Meetup)", page)
        self.assertIn("From Reddit", page)
        self.assertIn("From Around The Web (Google Alerts)", page)
        self.assertEqual(page.count('class="bh-activity-card"'), 7)

    def test_empty_activities_render_nothing_found(self):
        self.generate.return_value = gemini_response(
            {"events": [], "redditPosts": [], "googleAlerts": []}
        )

        state = self.controller.search_activities("weird")
        page = self.renderer.render_activity_results(
            state.results, state.is_loading, state.initial_load
        )

        self.assertEqual(state.status, Status.LOADED)
        self.assertIn("Nothing Found", page)
        self.assertNotIn("bh-section", page)


if __name__ == "__main__":
    unittest.main()
