"""
Blog Hub Streamlit app.

Two tabs share one controller per browser session: the Blog Hub asks Gemini for
recent posts from the configured local blogs, and the Activity Finder asks for
obscure events, Reddit threads and web alerts. Run with:

    streamlit run blog_hub/app.py
"""

import logging

import streamlit as st
from dotenv import load_dotenv

from blog_hub.config import Settings, get_api_key, load_config
from blog_hub.controller import BlogHubController
from blog_hub.errors import MissingCredentialError
from blog_hub.models import Article
from blog_hub.services.llm import LLMService
from blog_hub.services.renderer import PageRenderer, ViewMode, view_mode
from blog_hub.state import Tab

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

TAB_LABELS = {Tab.BLOG: "Blog Hub", Tab.ACTIVITY: "Activity Finder"}


@st.cache_resource(show_spinner=False)
def _get_settings() -> Settings:
    return load_config()


@st.cache_resource(show_spinner=False)
def _get_service(api_key: str) -> LLMService:
    """One Gemini client per Streamlit process."""
    return LLMService(api_key, _get_settings())


def _get_controller(api_key: str) -> BlogHubController:
    """Returns the controller for this browser session."""
    if "controller" not in st.session_state:
        settings = _get_settings()
        st.session_state.controller = BlogHubController(
            _get_service(api_key), settings.blogs
        )
    return st.session_state.controller


def _html(container, markup: str) -> None:
    if markup:
        container.markdown(markup, unsafe_allow_html=True)


def _toggle_saved(controller: BlogHubController, article: Article) -> None:
    if controller.is_saved(article.id):
        controller.unsave(article.id)
    else:
        controller.save(article)


def _render_blog_tab(controller: BlogHubController, renderer: PageRenderer) -> None:
    main_col, side_col = st.columns([8, 4], gap="large")

    with main_col:
        with st.form("blog-search"):
            st.subheader("Start Your Search")
            st.caption(
                f"Enter keywords to find the latest from {renderer.city_name}'s top blogs. "
                'Try "live music", "new restaurants", or "fall festivals".'
            )
            # A rerun handles one submit at a time, so a second search cannot overlap.
            keywords = st.text_input("Keywords", placeholder="e.g., 'weekend events'")
            submitted = st.form_submit_button("Scrape Articles")

        results_area = st.empty()
        if submitted:
            with st.spinner("Scraping..."):
                controller.search_articles(
                    keywords,
                    on_loading=lambda s: _html(
                        results_area,
                        renderer.render_blog_section(
                            s.results, controller.blogs, True, s.initial_load
                        ),
                    ),
                )
            results_area.empty()

        search = controller.articles
        _html(st, renderer.render_error(search.error))
        mode = view_mode(search.is_loading, search.initial_load, bool(search.results))
        if mode is not ViewMode.RESULTS or not search.results:
            _html(
                st,
                renderer.render_blog_section(
                    search.results, controller.blogs, search.is_loading, search.initial_load
                ),
            )
        else:
            for blog_name, articles in search.results.items():
                _html(st, renderer.render_section_heading(blog_name))
                columns = st.columns(2)
                for index, article in enumerate(articles):
                    with columns[index % 2]:
                        saved = controller.is_saved(article.id)
                        _html(st, renderer.render_article_card(article, saved))
                        st.button(
                            "🔖 Saved" if saved else "🔖 Save",
                            key=f"save-{article.id}",
                            on_click=_toggle_saved,
                            args=(controller, article),
                        )

    with side_col:
        saved_articles = list(controller.saved)
        _html(st, renderer.render_saved_pane(saved_articles))
        for article in saved_articles:
            st.button(
                f"🗑 Remove: {article.title}",
                key=f"remove-{article.id}",
                on_click=controller.unsave,
                args=(article.id,),
            )


def _render_activity_tab(controller: BlogHubController, renderer: PageRenderer) -> None:
    with st.form("activity-search"):
        st.subheader("Uncover Obscure Activities")
        st.caption(
            "Search for pop-ups, secret shows, and unique gatherings. "
            f"Try “{renderer.city_name} pop-up,” “secret show {renderer.city_name},” or “weird.”"
        )
        keywords = st.text_input("Keywords", placeholder="e.g., 'underground music'")
        submitted = st.form_submit_button("Find Activities")

    results_area = st.empty()
    if submitted:
        with st.spinner("Sleuthing..."):
            controller.search_activities(
                keywords,
                on_loading=lambda s: _html(
                    results_area,
                    renderer.render_activity_results(s.results, True, s.initial_load),
                ),
            )
        results_area.empty()

    search = controller.activities
    _html(st, renderer.render_error(search.error))
    _html(
        st,
        renderer.render_activity_results(
            search.results, search.is_loading, search.initial_load
        ),
    )


def main() -> None:
    """Main execution entry point."""
    settings = _get_settings()
    st.set_page_config(page_title=f"{settings.city_name} Blog Hub", layout="wide")
    renderer = PageRenderer(settings.city_name)
    _html(st, renderer.render_header())

    try:
        api_key = get_api_key()
    except MissingCredentialError as e:
        logger.error("Error: %s", e)
        st.error(f"{e} Set it in your environment or .env file and restart the app.")
        st.stop()
        return

    controller = _get_controller(api_key)

    labels = list(TAB_LABELS.values())
    choice = st.radio(
        "Section",
        labels,
        index=labels.index(TAB_LABELS[controller.active_tab]),
        horizontal=True,
        label_visibility="collapsed",
    )
    controller.select_tab(
        next(tab for tab, label in TAB_LABELS.items() if label == choice)
    )

    if controller.active_tab is Tab.BLOG:
        _render_blog_tab(controller, renderer)
    else:
        _render_activity_tab(controller, renderer)


if __name__ == "__main__":
    main()
