import logging
import re
from collections import Counter
from typing import Iterable, List, Optional
from urllib.parse import unquote

from portfolio.repos.content_repo import ContentRepo
from portfolio.schemas.content import (
    AnyContent,
    ContentListing,
    ContentType,
    RecentPost,
    RecentPostsSummary,
)

logger = logging.getLogger(__name__)


class ContentService:
    """Listing conventions shared by every page: draft filtering and date ordering."""

    def __init__(
        self,
        repo: ContentRepo,
        *,
        show_drafts: bool = False,
        fallback_image: str = "",
    ):
        self.repo = repo
        self.show_drafts = show_drafts
        self.fallback_image = fallback_image

    def list(self, content_type: ContentType) -> ContentListing:
        listing = self.repo.list_content(content_type)
        items = sort_by_date(self._visible(listing.items))
        return ContentListing(
            items=[self._with_fallback_image(item) for item in items],
            notice=listing.notice,
        )

    def get(self, content_type: ContentType, slug: str) -> Optional[AnyContent]:
        item = self.repo.get_content(content_type, slug)
        if item is None:
            return None
        if not self.show_drafts and not item.is_published:
            logger.info(f"Hiding draft {content_type.value} '{slug}'")
            return None
        return self._with_fallback_image(item)

    def list_by_tag(self, content_type: ContentType, tag: str) -> ContentListing:
        listing = self.list(content_type)
        wanted = tag.strip().lower()
        return ContentListing(
            items=[
                item
                for item in listing.items
                if any(t.lower() == wanted for t in item.tags)
            ],
            notice=listing.notice,
        )

    def list_by_category(self, content_type: ContentType, category: str) -> ContentListing:
        """Tags act as categories; spacing and slashes are ignored, so ``cicd`` finds ``CI/CD``."""
        listing = self.list(content_type)
        return ContentListing(
            items=[
                item
                for item in listing.items
                if any(category_matches(t, category) for t in item.tags)
            ],
            notice=listing.notice,
        )

    def search(self, content_type: ContentType, query: str) -> ContentListing:
        """Every whitespace-separated term must appear in the title, author or tags."""
        listing = self.list(content_type)
        terms = query.lower().split()
        if not terms:
            return listing
        return ContentListing(
            items=[
                item
                for item in listing.items
                if all(term in _searchable_text(item) for term in terms)
            ],
            notice=listing.notice,
        )

    def recent_posts(self, limit: int = 3) -> RecentPostsSummary:
        listing = self.list(ContentType.BLOG)
        return RecentPostsSummary(
            recentPosts=[
                RecentPost(
                    slug=post.slug,
                    title=post.title,
                    publishDate=post.datePublished or "",
                )
                for post in listing.items[:limit]
            ],
            categories=count_tags(listing.items),
            notice=listing.notice,
        )

    def _visible(self, items: Iterable[AnyContent]) -> List[AnyContent]:
        if self.show_drafts:
            return list(items)
        return [item for item in items if item.is_published]

    def _with_fallback_image(self, item: AnyContent) -> AnyContent:
        if item.featuredImage or not self.fallback_image:
            return item
        return item.model_copy(update={"featuredImage": self.fallback_image})


def sort_by_date(items: Iterable[AnyContent]) -> List[AnyContent]:
    """Newest first; undated items last; ties keep their original order."""
    items = list(items)
    dated = [item for item in items if item.datePublished]
    undated = [item for item in items if not item.datePublished]
    # sorted() is stable, so reverse=True keeps ties in insertion order.
    return sorted(dated, key=lambda item: item.datePublished, reverse=True) + undated


def count_tags(items: Iterable[AnyContent]) -> dict[str, int]:
    counts: Counter = Counter()
    for item in items:
        counts.update(item.tags)
    return dict(counts)


def category_matches(tag: str, category: str) -> bool:
    wanted = unquote(category).lower()
    if tag.lower() == wanted:
        return True
    normalized_tag = re.sub(r"\s+", "", tag.lower())
    normalized_wanted = re.sub(r"\s+", "", wanted)
    return normalized_tag == normalized_wanted or (
        normalized_tag.replace("/", "") == normalized_wanted.replace("/", "")
    )


def _searchable_text(item: AnyContent) -> str:
    return " ".join([item.title, item.author, " ".join(item.tags)]).lower()
