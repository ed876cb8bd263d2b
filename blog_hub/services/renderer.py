"""
HTML rendering for the Blog Hub page.

This module provides the PageRenderer class which handles:
- Article and activity cards
- Per-blog and per-source sections, with loading placeholders
- Initial, empty and error messages
- The saved articles pane

Every method is a pure function of its arguments. Model-supplied text is escaped.
"""

import enum
from html import escape
from typing import Collection, Dict, List, Mapping, Optional, Sequence, Union

from blog_hub.models import ActivityResults, Article, Blog, Event, GoogleAlert, RedditPost

ActivityItem = Union[Event, RedditPost, GoogleAlert]


class ViewMode(enum.Enum):
    SKELETON = "skeleton"
    INITIAL = "initial"
    EMPTY = "empty"
    RESULTS = "results"


def view_mode(is_loading: bool, initial_load: bool, has_results: bool) -> ViewMode:
    """Picks what a list section shows. Loading wins, then the initial prompt."""
    if is_loading:
        return ViewMode.SKELETON
    if initial_load:
        return ViewMode.INITIAL
    if not has_results:
        return ViewMode.EMPTY
    return ViewMode.RESULTS


class PageRenderer:
    """Renders the Blog Hub components as HTML snippets."""

    _STYLES = {
        "header": "border-bottom: 1px solid #374151; padding: 16px 0; margin-bottom: 16px;",
        "header_h1": "margin: 0; font-size: 30px; font-weight: 700; color: #fff;",
        "header_accent": "color: #c084fc;",
        "header_p": "margin: 4px 0 0; color: #9ca3af; font-size: 14px;",
        "section": "margin-top: 32px;",
        "section_h2": "font-size: 24px; font-weight: 700; color: #d1d5db; padding-left: 12px; margin-bottom: 16px;",
        "grid": "display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 24px;",
        "card": "background: #1f2937; border: 1px solid #374151; border-radius: 8px; overflow: hidden; display: flex; flex-direction: column;",
        "card_img": "width: 100%; height: 160px; object-fit: cover;",
        "card_body": "padding: 16px;",
        "card_date": "font-size: 14px; color: #c084fc; font-family: monospace; margin: 0 0 4px;",
        "card_h3": "font-size: 18px; font-weight: 700; color: #f3f4f6; margin: 0 0 8px;",
        "card_p": "font-size: 14px; color: #9ca3af; line-height: 1.6; margin: 0;",
        "card_footer": "margin-top: 16px; padding-top: 12px; border-top: 1px solid #374151; display: flex; justify-content: space-between;",
        "link": "text-decoration: none; color: #c084fc; font-weight: 600; font-size: 14px;",
        "saved_marker": "font-size: 12px; color: #fff; background: #9333ea; padding: 2px 8px; border-radius: 9999px;",
        "badge": "font-size: 12px; font-weight: 700; padding: 2px 10px; border-radius: 9999px; margin-right: 8px;",
        "meta": "font-size: 14px; color: #9ca3af; font-family: monospace;",
        "skeleton_bar": "height: 14px; background: #374151; border-radius: 4px; margin-bottom: 10px;",
        "message": "margin-top: 32px; text-align: center; background: #1f2937; border: 1px solid #374151; padding: 40px; border-radius: 8px;",
        "message_h3": "font-size: 20px; font-weight: 600; color: #d1d5db; margin: 0;",
        "message_p": "color: #9ca3af; margin: 8px 0 0;",
        "error": "color: #f87171; background: rgba(127, 29, 29, 0.5); padding: 12px; border-radius: 6px; margin-top: 16px;",
        "pane": "background: #1f2937; border: 1px solid #374151; border-radius: 8px; padding: 24px;",
        "pane_h2": "font-size: 20px; font-weight: 600; color: #d8b4fe; margin: 0 0 16px;",
        "pane_item": "padding: 12px; background: #111827; border: 1px solid #374151; border-radius: 6px; margin-bottom: 12px; list-style: none;",
        "pane_link": "text-decoration: none; color: #e5e7eb; font-size: 14px; font-weight: 500;",
        "pane_source": "font-size: 12px; color: #6b7280; font-family: monospace; margin: 4px 0 0;",
        "pane_empty": "color: #9ca3af; font-size: 14px; text-align: center; padding: 24px 0;",
    }

    _BORDERS = {
        "blog": "#a855f7",
        "event": "#22c55e",
        "reddit": "#f97316",
        "alert": "#3b82f6",
    }

    _BADGES = {
        "event": "background: #166534; color: #bbf7d0;",
        "reddit": "background: #9a3412; color: #fed7aa;",
        "alert": "background: #1e40af; color: #bfdbfe;",
    }

    # (section title, number of placeholders, card kind)
    _ACTIVITY_SKELETON = [
        ("Events", 3, "event"),
        ("From Reddit", 2, "reddit"),
        ("From Around The Web", 2, "alert"),
    ]

    def __init__(self, city_name: str = "Nashville"):
        self.city_name = city_name

    # Snippets are emitted on a single line: st.markdown runs them through
    # CommonMark, where a blank line followed by indented markup becomes a code block.

    def render_header(self) -> str:
        return (
            f'<header style="{self._STYLES["header"]}">'
            f'<h1 style="{self._STYLES["header_h1"]}">{escape(self.city_name)} '
            f'<span style="{self._STYLES["header_accent"]}">Blog Hub</span></h1>'
            f'<p style="{self._STYLES["header_p"]}">AI-Powered Weekly Article Aggregator</p>'
            "</header>"
        )

    def render_error(self, message: Optional[str]) -> str:
        if not message:
            return ""
        return f"<p class='bh-error' style='{self._STYLES['error']}'>{escape(message)}</p>"

    def render_message(self, title: str, body: str) -> str:
        """Renders a centred notice such as the initial or empty state."""
        return (
            f'<div class="bh-message" style="{self._STYLES["message"]}">'
            f'<h3 style="{self._STYLES["message_h3"]}">{escape(title)}</h3>'
            f'<p style="{self._STYLES["message_p"]}">{escape(body)}</p>'
            "</div>"
        )

    def render_skeleton_card(self) -> str:
        bars = "".join(
            f"<div style='{self._STYLES['skeleton_bar']} width: {width}%;'></div>"
            for width in (25, 75, 100, 83)
        )
        return (
            f"<div class='bh-skeleton' style='{self._STYLES['card']}'>"
            f"<div style='{self._STYLES['card_body']}'>{bars}</div></div>"
        )

    def render_section_heading(self, title: str, kind: str = "blog") -> str:
        h2_style = f"{self._STYLES['section_h2']} border-left: 4px solid {self._BORDERS[kind]};"
        return f"<h2 style='{h2_style}'>{escape(title)}</h2>"

    def _section(self, title: str, cards: Sequence[str], kind: str) -> str:
        return (
            f'<section class="bh-section" style="{self._STYLES["section"]}">'
            f"{self.render_section_heading(title, kind)}"
            f'<div style="{self._STYLES["grid"]}">{"".join(cards)}</div>'
            "</section>"
        )

    def _link(self, href: str, label: str, style_key: str = "link") -> str:
        return (
            f'<a href="{escape(href, quote=True)}" target="_blank" rel="noopener noreferrer" '
            f'style="{self._STYLES[style_key]}">{escape(label)}</a>'
        )

    def render_article_card(self, article: Article, is_saved: bool = False) -> str:
        image_url = f"https://picsum.photos/seed/{escape(article.id, quote=True)}/400/200"
        marker = (
            f"<span class='bh-saved' style='{self._STYLES['saved_marker']}'>Saved</span>"
            if is_saved
            else ""
        )
        return (
            f'<div class="bh-card" id="{escape(article.id, quote=True)}" style="{self._STYLES["card"]}">'
            f'<img src="{image_url}" alt="{escape(article.title, quote=True)}" style="{self._STYLES["card_img"]}">'
            f'<div style="{self._STYLES["card_body"]}">'
            f'<p style="{self._STYLES["card_date"]}">{escape(article.date)}</p>'
            f'<h3 style="{self._STYLES["card_h3"]}">{escape(article.title)}</h3>'
            f'<p style="{self._STYLES["card_p"]}">{escape(article.summary)}</p>'
            f'<div style="{self._STYLES["card_footer"]}">'
            f'{self._link(article.link, "Read More")}{marker}'
            "</div></div></div>"
        )

    def render_blog_section(
        self,
        articles_by_blog: Optional[Mapping[str, List[Article]]],
        blogs: Sequence[Blog],
        is_loading: bool,
        initial_load: bool,
        saved_ids: Collection[str] = (),
    ) -> str:
        """Renders the blog hub results area."""
        mode = view_mode(is_loading, initial_load, bool(articles_by_blog))
        if mode is ViewMode.SKELETON:
            return "".join(
                self._section(blog["name"], [self.render_skeleton_card()] * 2, "blog")
                for blog in blogs
            )
        if mode is ViewMode.INITIAL:
            return self.render_message(
                f"Welcome to the {self.city_name} Blog Hub",
                f"Enter some keywords above to begin your discovery of {self.city_name}'s latest happenings!",
            )
        if mode is ViewMode.EMPTY or not articles_by_blog:
            return self.render_message(
                "No Articles Found",
                "The AI couldn't find any articles for your keywords. Try being more general or check for typos.",
            )
        return "".join(
            self._section(
                blog_name,
                [self.render_article_card(a, a.id in saved_ids) for a in articles],
                "blog",
            )
            for blog_name, articles in articles_by_blog.items()
        )

    def render_activity_card(self, item: ActivityItem, kind: str) -> str:
        """Renders one event ('event'), Reddit post ('reddit') or alert ('alert')."""
        if isinstance(item, RedditPost):
            badge_text = item.subreddit
            meta = f"by {item.author}"
        elif isinstance(item, Event):
            badge_text = item.source
            meta = item.date
        else:
            badge_text = item.source
            meta = ""
        badge_style = f"{self._STYLES['badge']} {self._BADGES[kind]}"
        meta_html = f"<span style='{self._STYLES['meta']}'>{escape(meta)}</span>" if meta else ""
        return (
            f'<div class="bh-activity-card" style="{self._STYLES["card"]}">'
            f'<div style="{self._STYLES["card_body"]}">'
            f'<div><span style="{badge_style}">{escape(badge_text)}</span>{meta_html}</div>'
            f'<h3 style="{self._STYLES["card_h3"]}">{escape(item.title)}</h3>'
            f'<p style="{self._STYLES["card_p"]}">{escape(item.summary)}</p>'
            f'<div style="{self._STYLES["card_footer"]}">{self._link(item.link, "View Source")}</div>'
            "</div></div>"
        )

    def render_activity_results(
        self,
        results: Optional[ActivityResults],
        is_loading: bool,
        initial_load: bool,
    ) -> str:
        """Renders the activity finder results area."""
        has_results = results is not None and not results.is_empty()
        mode = view_mode(is_loading, initial_load, has_results)
        if mode is ViewMode.SKELETON:
            return "".join(
                self._section(title, [self.render_skeleton_card()] * count, kind)
                for title, count, kind in self._ACTIVITY_SKELETON
            )
        if mode is ViewMode.INITIAL:
            return self.render_message(
                f"Find Hidden Gems in {self.city_name}",
                "Use the search bar above to uncover unique, underground, and obscure events happening in the city.",
            )
        if mode is ViewMode.EMPTY or results is None:
            return self.render_message(
                "Nothing Found",
                "The AI couldn't uncover any hidden gems for those keywords. Try something else!",
            )

        groups: Dict[str, Sequence[ActivityItem]] = {
            "event": results.events,
            "reddit": results.reddit_posts,
            "alert": results.google_alerts,
        }
        titles = {
            "event": "Events (Eventbrite & Meetup)",
            "reddit": "From Reddit",
            "alert": "From Around The Web (Google Alerts)",
        }
        return "".join(
            self._section(
                titles[kind], [self.render_activity_card(i, kind) for i in items], kind
            )
            for kind, items in groups.items()
            if items
        )

    def render_saved_pane(self, saved: Sequence[Article]) -> str:
        """Renders the 'My Weekly List' pane."""
        if saved:
            items = "".join(
                f'<li class="bh-saved-item" style="{self._STYLES["pane_item"]}">'
                f'{self._link(a.link, a.title, "pane_link")}'
                f'<p style="{self._STYLES["pane_source"]}">{escape(a.source)}</p>'
                "</li>"
                for a in saved
            )
            body = f"<ul style='padding: 0; margin: 0;'>{items}</ul>"
        else:
            body = (
                f"<p style='{self._STYLES['pane_empty']}'>Click the bookmark icon on any "
                "article to save it here for your weekly reading list.</p>"
            )
        return (
            f'<aside style="{self._STYLES["pane"]}">'
            f'<h2 style="{self._STYLES["pane_h2"]}">My Weekly List</h2>'
            f"{body}</aside>"
        )
