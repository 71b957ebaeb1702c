import logging

from fastapi import APIRouter, Depends, HTTPException

from portfolio import dependencies as deps
from portfolio.schemas.content import (
    AnyContent,
    ContentListing,
    ContentType,
    RecentPostsSummary,
)
from portfolio.services.content_service import ContentService

logger = logging.getLogger(__name__)

router = APIRouter()


def _listing(service: ContentService, content_type: ContentType) -> ContentListing:
    try:
        return service.list(content_type)
    except Exception as e:
        logger.error(f"Unexpected error listing {content_type.value}: {e}")
        return ContentListing(
            items=[], notice=f"Failed to load {content_type.value} content."
        )


def _detail(service: ContentService, content_type: ContentType, slug: str):
    try:
        item = service.get(content_type, slug)
        if not item:
            raise HTTPException(status_code=404, detail="Content not found")
        return item
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving {content_type.value} {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve content")


@router.get("/blog", response_model=ContentListing)
def list_blog_posts(service: ContentService = Depends(deps.get_content_service)):
    """All visible blog posts, newest first."""
    return _listing(service, ContentType.BLOG)


@router.get("/blog/tag/{tag}", response_model=ContentListing)
def list_blog_posts_by_tag(
    tag: str, service: ContentService = Depends(deps.get_content_service)
):
    try:
        return service.list_by_tag(ContentType.BLOG, tag)
    except Exception as e:
        logger.error(f"Unexpected error listing blog tag {tag}: {e}")
        return ContentListing(items=[], notice="Failed to load blog content.")


@router.get("/blog/search", response_model=ContentListing)
def search_blog_posts(
    q: str = "", service: ContentService = Depends(deps.get_content_service)
):
    """Posts whose title, author or tags contain every term of ``q``."""
    try:
        return service.search(ContentType.BLOG, q)
    except Exception as e:
        logger.error(f"Unexpected error searching blog for {q!r}: {e}")
        return ContentListing(items=[], notice="Failed to load blog content.")


@router.get("/blog/category/{category:path}", response_model=ContentListing)
def list_blog_posts_by_category(
    category: str, service: ContentService = Depends(deps.get_content_service)
):
    try:
        listing = service.list_by_category(ContentType.BLOG, category)
    except Exception as e:
        logger.error(f"Unexpected error listing blog category {category}: {e}")
        return ContentListing(items=[], notice="Failed to load blog content.")

    if not listing.items and not listing.notice:
        raise HTTPException(status_code=404, detail="Category not found")
    return listing


@router.get("/blog/{slug}", response_model=AnyContent)
def get_blog_post(slug: str, service: ContentService = Depends(deps.get_content_service)):
    return _detail(service, ContentType.BLOG, slug)


@router.get("/projects", response_model=ContentListing)
def list_projects(service: ContentService = Depends(deps.get_content_service)):
    return _listing(service, ContentType.PROJECT)


@router.get("/projects/{slug}", response_model=AnyContent)
def get_project(slug: str, service: ContentService = Depends(deps.get_content_service)):
    return _detail(service, ContentType.PROJECT, slug)


@router.get("/api/blog/recent-posts", response_model=RecentPostsSummary)
def recent_posts(service: ContentService = Depends(deps.get_content_service)):
    """Latest three posts plus a post count per tag, for the sidebar."""
    try:
        return service.recent_posts()
    except Exception as e:
        logger.error(f"Error building recent posts: {e}")
        return RecentPostsSummary(notice="Failed to fetch blog data")
