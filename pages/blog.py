"""
Blog Page
Post list with search and category filter, and a single-post view
"""

from datetime import datetime

import streamlit as st

from config import SESSION_BLOG_SLUG
from utils.blog import BLOG_CATEGORIES, filter_posts, get_category, get_post_by_slug


def _format_date(published_at: str) -> str:
    try:
        return datetime.fromisoformat(published_at.replace("Z", "+00:00")).strftime("%B %d, %Y")
    except ValueError:
        return published_at


def _open_post(slug):
    st.session_state[SESSION_BLOG_SLUG] = slug


def _post_card(post, featured: bool = False):
    category = get_category(post.category)
    with st.container(border=True):
        if featured:
            st.caption("⭐ Featured")
        st.markdown(f"### {post.title}")
        st.caption(
            f"{category.name if category else post.category} · {_format_date(post.published_at)} · "
            f"{post.read_time} min read"
        )
        st.write(post.excerpt)
        st.caption(" ".join(f"`{tag}`" for tag in post.tags))
        st.button("Read more →", key=f"open_{post.slug}", on_click=_open_post, args=(post.slug,))


def _post_view(slug: str):
    st.button("← Back to Blog", on_click=_open_post, args=(None,))

    post = get_post_by_slug(slug)
    if post is None:
        st.markdown('<div class="main-header">Post Not Found</div>', unsafe_allow_html=True)
        st.info("The blog post you're looking for doesn't exist.")
        return

    category = get_category(post.category)
    st.markdown(f'<div class="main-header">{post.title}</div>', unsafe_allow_html=True)
    st.caption(
        f"👤 {post.author} · 📅 {_format_date(post.published_at)} · ⏱️ {post.read_time} min read"
        + (f" · {category.name}" if category else "")
    )
    st.markdown("---")
    st.markdown(post.content)
    st.markdown("---")
    st.caption("🏷️ " + ", ".join(post.tags))


def blog_page():
    """Blog Page: list, search and read posts."""
    slug = st.session_state.get(SESSION_BLOG_SLUG)
    if slug:
        _post_view(slug)
        return

    st.markdown('<div class="main-header">📝 Blog</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">Thoughts, insights, and stories</div>', unsafe_allow_html=True)

    col1, col2 = st.columns([2, 1])
    with col1:
        query = st.text_input("Search posts", placeholder="Search by title, excerpt or tag...")
    with col2:
        category_names = ["All categories"] + [c.name for c in BLOG_CATEGORIES]
        selected = st.selectbox("Category", category_names)

    category_id = next((c.id for c in BLOG_CATEGORIES if c.name == selected), None)
    posts = filter_posts(query, category_id)
    filtering = bool(query.strip()) or category_id is not None

    if filtering:
        label = "post" if len(posts) == 1 else "posts"
        st.info(f"Found {len(posts)} {label}" + (f' matching "{query.strip()}"' if query.strip() else ""))

    featured = [p for p in posts if p.featured]
    if featured and not filtering:
        st.markdown("---")
        st.markdown("### ⭐ Featured Posts")
        cols = st.columns(len(featured))
        for col, post in zip(cols, featured):
            with col:
                _post_card(post, featured=True)
        posts = [p for p in posts if not p.featured]
        heading = "Latest Posts"
    else:
        heading = "All Posts"

    st.markdown("---")
    st.markdown(f"### {heading}")
    if not posts:
        st.warning("No posts found. Try adjusting your search or filter criteria.")
        return

    for post in posts:
        _post_card(post)
