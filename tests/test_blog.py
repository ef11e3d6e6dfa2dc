"""
Tests for the blog content store
"""

from content.blog_posts import BLOG_POSTS
from utils.blog import (
    BLOG_CATEGORIES,
    BlogPost,
    calculate_read_time,
    filter_posts,
    generate_slug,
    get_category,
    get_featured_posts,
    get_post_by_id,
    get_post_by_slug,
    get_posts_by_category,
)


def make_post(post_id, title, category, tags=(), featured=False):
    return BlogPost(
        id=post_id,
        title=title,
        excerpt=f"About {title}",
        content=title,
        author="cyrus",
        published_at="2024-01-01",
        category=category,
        slug=generate_slug(title),
        read_time=1,
        tags=list(tags),
        featured=featured,
    )


class TestHelpers:

    def test_read_time_rounds_up(self):
        assert calculate_read_time("word " * 200) == 1
        assert calculate_read_time("word " * 201) == 2
        assert calculate_read_time("") == 1
        assert calculate_read_time("just a few words") == 1

    def test_slug(self):
        assert generate_slug("Excel Data Analysis: From Basics to Advanced!") == "excel-data-analysis-from-basics-to-advanced"
        assert generate_slug("  Hello   World  ") == "hello-world"


class TestBundledPosts:

    def test_ids_and_slugs_are_unique(self):
        assert len({p.id for p in BLOG_POSTS}) == len(BLOG_POSTS)
        assert len({p.slug for p in BLOG_POSTS}) == len(BLOG_POSTS)

    def test_every_post_has_a_known_category(self):
        for post in BLOG_POSTS:
            assert get_category(post.category) is not None

    def test_featured_posts(self):
        assert [p.id for p in get_featured_posts()] == ["1", "2"]

    def test_lookups(self):
        post = get_post_by_slug("excel-data-analysis-basics-to-advanced")
        assert post is get_post_by_id("2")
        assert post.category == "data-analysis"
        assert get_post_by_slug("no-such-post") is None
        assert get_post_by_id("999") is None


class TestFilterPosts:

    def setup_method(self):
        self.posts = [
            make_post("1", "Pandas Tricks", "data-analysis", tags=["Python"]),
            make_post("2", "CSS Grid", "web-dev", tags=["Frontend"], featured=True),
            make_post("3", "Focus Time", "productivity"),
        ]

    def test_no_filters_returns_everything(self):
        assert filter_posts(posts=self.posts) == self.posts

    def test_query_matches_title_excerpt_and_tags(self):
        assert [p.id for p in filter_posts("pandas", posts=self.posts)] == ["1"]
        assert [p.id for p in filter_posts("about css", posts=self.posts)] == ["2"]
        assert [p.id for p in filter_posts("FRONTEND", posts=self.posts)] == ["2"]

    def test_category_and_query_combine(self):
        assert filter_posts("pandas", "web-dev", posts=self.posts) == []
        assert [p.id for p in filter_posts(category_id="productivity", posts=self.posts)] == ["3"]

    def test_category_helpers(self):
        assert [p.id for p in get_posts_by_category("web-dev", posts=self.posts)] == ["2"]
        assert [p.id for p in get_featured_posts(posts=self.posts)] == ["2"]
        assert len(BLOG_CATEGORIES) == 5
        assert get_category("nope") is None
