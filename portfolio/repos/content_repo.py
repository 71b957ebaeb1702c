import datetime
import logging
import math
from pathlib import Path
from typing import List, Optional, Protocol

import yaml

from portfolio.errors import PortfolioError
from portfolio.schemas.content import (
    AnyContent,
    BlogPost,
    ContentListing,
    ContentType,
    Project,
)
from portfolio.services import queries
from portfolio.services.frontmatter_parser import FrontmatterParser
from portfolio.services.graphql_client import GraphQLClient
from portfolio.settings import Settings

logger = logging.getLogger(__name__)

REMOTE_FETCH_NOTICE = "Content is temporarily unavailable from the content API."

_LIST_QUERIES = {
    ContentType.BLOG: (queries.LIST_BLOG_POSTS, "listBlogPosts"),
    ContentType.PROJECT: (queries.LIST_PROJECTS, "listProjects"),
}
_GET_QUERIES = {
    ContentType.BLOG: (queries.GET_BLOG_POST, "getBlogPost"),
    ContentType.PROJECT: (queries.GET_PROJECT, "getProject"),
}


class ContentRepo(Protocol):
    def list_content(self, content_type: ContentType) -> ContentListing: ...

    def get_content(
        self, content_type: ContentType, slug: str
    ) -> Optional[AnyContent]: ...


class LocalContentRepo:
    """Reads ``<content_dir>/<blog|projects>/<slug>.md`` on every call."""

    source = "local"

    def __init__(self, content_dir: str | Path, parser: FrontmatterParser):
        self.content_dir = Path(content_dir)
        self.parser = parser

    def list_content(self, content_type: ContentType) -> ContentListing:
        directory = self.content_dir / content_type.directory
        if not directory.is_dir():
            logger.warning(f"Content directory not found: {directory}")
            return ContentListing(
                items=[], notice=f"No {content_type.value} content directory found."
            )

        items: List[AnyContent] = []
        for path in sorted(directory.glob("*.md")):
            item = self._read(content_type, path)
            if item is not None:
                items.append(item)
        return ContentListing(items=items)

    def get_content(
        self, content_type: ContentType, slug: str
    ) -> Optional[AnyContent]:
        directory = self.content_dir / content_type.directory
        path = directory / f"{slug}.md"
        if path.parent != directory or not path.is_file():
            return None
        return self._read(content_type, path, include_content=True)

    def _read(
        self, content_type: ContentType, path: Path, include_content: bool = False
    ) -> Optional[AnyContent]:
        try:
            parsed = self.parser.parse(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Failed to read {path}: {e}")
            return None

        data = dict(parsed.data)
        # The filename is the slug; a differing frontmatter slug is ignored.
        declared = data.get("slug")
        if declared and str(declared) != path.stem:
            logger.warning(
                f"Ignoring frontmatter slug '{declared}' in {path.name}, using '{path.stem}'"
            )
        data["slug"] = path.stem
        return build_content_item(
            content_type, data, parsed.content, include_content=include_content
        )


class GraphQLContentRepo:
    """Fetches content from the upstream GraphQL API on every call."""

    source = "graphql"

    def __init__(self, client: GraphQLClient):
        self.client = client

    def list_content(self, content_type: ContentType) -> ContentListing:
        query, field = _LIST_QUERIES[content_type]
        try:
            data = self.client.execute(query)
        except PortfolioError as e:
            logger.error(f"Failed to fetch {content_type.value} list: {e}")
            return ContentListing(items=[], notice=REMOTE_FETCH_NOTICE)

        rows = ((data.get(field) or {}).get("items")) or []
        items = [
            build_content_item(content_type, _from_remote(row), row.get("content"))
            for row in rows
            if row and row.get("slug")
        ]
        logger.info(f"Fetched {len(items)} {content_type.value} items from GraphQL")
        return ContentListing(items=items)

    def get_content(
        self, content_type: ContentType, slug: str
    ) -> Optional[AnyContent]:
        query, field = _GET_QUERIES[content_type]
        try:
            data = self.client.execute(query, {"slug": slug})
        except PortfolioError as e:
            logger.error(f"Failed to fetch {content_type.value} '{slug}': {e}")
            return None

        row = data.get(field)
        if not row:
            logger.info(f"No {content_type.value} found with slug: {slug}")
            return None
        return build_content_item(
            content_type, _from_remote(row), row.get("content"), include_content=True
        )


def build_content_repo(
    settings_obj: Settings,
    *,
    client: Optional[GraphQLClient] = None,
    parser: Optional[FrontmatterParser] = None,
) -> ContentRepo:
    """Pick the content source once, from the configured environment."""
    if settings_obj.is_development:
        logger.info(f"Serving content from local directory {settings_obj.CONTENT_DIR}")
        return LocalContentRepo(settings_obj.CONTENT_DIR, parser or FrontmatterParser())

    logger.info("Serving content from the GraphQL API")
    return GraphQLContentRepo(client or GraphQLClient.from_settings(settings_obj))


def build_content_item(
    content_type: ContentType,
    data: dict,
    body: Optional[str],
    include_content: bool = False,
) -> AnyContent:
    """Map a raw field mapping onto a content model, filling defaults."""
    published = _convert_date(data.get("datePublished") or data.get("publishDate"))
    modified = _convert_date(data.get("dateModified")) or published

    fields = {
        "slug": str(data["slug"]),
        "title": _text(data.get("title")) or _derive_title(str(data["slug"])),
        "excerpt": _text(data.get("excerpt")),
        "author": _normalize_author(data.get("author")),
        "tags": _normalize_list(data.get("tags")),
        "datePublished": published,
        "dateModified": modified,
        "status": data.get("status") or "draft",
        "featuredImage": _text(data.get("featuredImage") or data.get("image")),
        "readingTime": _reading_time(data.get("readingTime"), body),
        "content": body if include_content else None,
    }

    if content_type is ContentType.PROJECT:
        return Project(
            **fields,
            projectType=_text(data.get("projectType")),
            projectStatus=_text(data.get("projectStatus")),
            githubUrl=_text(data.get("githubUrl")),
            liveUrl=_text(data.get("liveUrl")),
            techStack=_normalize_list(data.get("techStack")),
            thumbnailImage=_text(data.get("thumbnailImage")),
            featured=bool(data.get("featured", False)),
        )
    return BlogPost(**fields)


def _from_remote(row: dict) -> dict:
    data = dict(row)
    data["datePublished"] = row.get("datePublished") or row.get("publishedAt")
    data["dateModified"] = row.get("dateModified") or row.get("updatedAt")
    return data


def _convert_date(value):
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value) if value else None


def _derive_title(slug: str) -> str:
    return slug.replace("-", " ").replace("_", " ").title()


def _normalize_author(value) -> str:
    if isinstance(value, dict):
        value = value.get("name")
    return str(value) if value else "Unknown"


def _normalize_list(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value if item]
    return [str(value)]


def _reading_time(value, body: Optional[str]) -> Optional[str]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{int(value)} min read"
    if isinstance(value, str) and value:
        return value
    if body:
        return calculate_reading_time(body)
    return None


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min read"


def _text(value) -> str:
    return str(value) if value else ""
