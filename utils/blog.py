"""
Blog content store: categories, lookups and search over the bundled posts
"""
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

WORDS_PER_MINUTE = 200


@dataclass(frozen=True)
class BlogCategory:
    id: str
    name: str
    description: str
    color: str


@dataclass(frozen=True)
class BlogPost:
    id: str
    title: str
    excerpt: str
    content: str
    author: str
    published_at: str
    category: str
    slug: str
    read_time: int
    tags: List[str] = field(default_factory=list)
    featured: bool = False
    updated_at: Optional[str] = None
    cover_image: Optional[str] = None


BLOG_CATEGORIES = [
    BlogCategory("tech", "Technology", "Latest in tech, programming, and development", "#06B6D4"),
    BlogCategory("web-dev", "Web Development", "Frontend, backend, and full-stack development", "#10B981"),
    BlogCategory("data-analysis", "Data Analysis", "Excel, data visualization, and analytics", "#8B5CF6"),
    BlogCategory("productivity", "Productivity", "Tools, tips, and workflows for better productivity", "#F97316"),
    BlogCategory("insights", "Insights", "Personal thoughts and industry insights", "#EC4899"),
]


def calculate_read_time(content: str) -> int:
    """Reading time in whole minutes at 200 words per minute, rounded up, never below one."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def generate_slug(title: str) -> str:
    slug = title.lower()
    slug = re.sub(r'[^\w\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    return slug.strip('-')


def _posts(posts):
    if posts is None:
        from content.blog_posts import BLOG_POSTS
        return BLOG_POSTS
    return posts


def get_category(category_id: str) -> Optional[BlogCategory]:
    return next((c for c in BLOG_CATEGORIES if c.id == category_id), None)


def get_post_by_id(post_id: str, posts=None) -> Optional[BlogPost]:
    return next((p for p in _posts(posts) if p.id == post_id), None)


def get_post_by_slug(slug: str, posts=None) -> Optional[BlogPost]:
    return next((p for p in _posts(posts) if p.slug == slug), None)


def get_posts_by_category(category_id: str, posts=None) -> List[BlogPost]:
    return [p for p in _posts(posts) if p.category == category_id]


def get_featured_posts(posts=None) -> List[BlogPost]:
    return [p for p in _posts(posts) if p.featured]


def filter_posts(query: str = "", category_id: Optional[str] = None, posts=None) -> List[BlogPost]:
    """
    Posts matching an optional category and a case-insensitive query.

    The query matches against title, excerpt and tags.
    """
    needle = (query or "").strip().lower()
    matches = []
    for post in _posts(posts):
        if category_id and post.category != category_id:
            continue
        if needle and not (
            needle in post.title.lower()
            or needle in post.excerpt.lower()
            or any(needle in tag.lower() for tag in post.tags)
        ):
            continue
        matches.append(post)
    return matches
