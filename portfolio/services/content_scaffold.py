import datetime
import logging
import re
from pathlib import Path
from typing import Optional

from portfolio.schemas.content import ContentType
from portfolio.services.frontmatter_parser import FrontmatterParser

logger = logging.getLogger(__name__)

BLOG_TEMPLATE = """## Introduction

Start writing your blog post here.

## Main Section

This is the main content of your post.

## Conclusion

Summarize the key points of your post here.
"""

PROJECT_TEMPLATE = """## Overview

Describe what the project does and why it exists.

## Architecture

Outline the main components and how they fit together.

## Lessons Learned

What worked, what didn't, what's next.
"""


class ContentExistsError(FileExistsError):
    pass


def slugify(title: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", title.lower())
    slug = re.sub(r"[\s_]+", "-", slug.strip())
    return re.sub(r"-{2,}", "-", slug).strip("-")


def default_frontmatter(
    content_type: ContentType, title: str, slug: str, today: datetime.date
) -> dict:
    data = {
        "title": title,
        "slug": slug,
        "excerpt": f"A brief description of the {content_type.value} goes here.",
        "author": "Unknown",
        "tags": [],
        "datePublished": today.isoformat(),
        "dateModified": today.isoformat(),
        "status": "draft",
        "featuredImage": "",
    }
    if content_type is ContentType.PROJECT:
        data.update(
            {
                "projectType": "",
                "projectStatus": "In Progress",
                "githubUrl": "",
                "liveUrl": "",
                "techStack": [],
                "thumbnailImage": "",
                "featured": False,
            }
        )
    return data


def create_content_file(
    content_dir: str | Path,
    content_type: ContentType,
    title: str,
    *,
    today: Optional[datetime.date] = None,
    parser: Optional[FrontmatterParser] = None,
) -> Path:
    """Write a draft ``<slug>.md`` under the content directory and return its path."""
    slug = slugify(title)
    if not slug:
        raise ValueError(f"Cannot derive a slug from title {title!r}")

    directory = Path(content_dir) / content_type.directory
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{slug}.md"
    if path.exists():
        raise ContentExistsError(f"{content_type.value} already exists at {path}")

    parser = parser or FrontmatterParser()
    data = default_frontmatter(content_type, title, slug, today or datetime.date.today())
    body = BLOG_TEMPLATE if content_type is ContentType.BLOG else PROJECT_TEMPLATE
    path.write_text(parser.dump(data, body), encoding="utf-8")

    logger.info(f"Created {content_type.value} draft at {path}")
    return path
